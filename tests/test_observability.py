import logging

from ec_fdk.core.observability import log_event, redact_url


def test_log_event_passes_fields_as_extras(caplog):
    with caplog.at_level(logging.INFO, logger="ec_fdk.observability"):
        log_event("fdk.act", action="entry_list", env="stage")

    record = next(r for r in caplog.records if r.getMessage() == "fdk.act")
    assert record.action == "entry_list"
    assert record.env == "stage"


def test_log_event_drops_secrets_and_reserved_keys(caplog):
    log = logging.getLogger("ec_fdk.test")
    with caplog.at_level(logging.INFO, logger="ec_fdk.test"):
        # "name" and "msg" would make LogRecord raise KeyError
        log_event(
            "auth.login",
            logger=log,
            token="secret",
            password="pw",
            name="clash",
            msg="clash",
            realm="admin",
        )

    record = next(r for r in caplog.records if r.getMessage() == "auth.login")
    assert record.name == "ec_fdk.test"
    assert record.realm == "admin"
    assert not hasattr(record, "token")
    assert not hasattr(record, "password")


def test_redact_url_masks_secret_query_params():
    url = (
        "https://datamanager.cachena.entrecode.de/api/83cc6374/_auth/logout"
        "?clientID=rest&token=abc"
    )
    redacted = redact_url(url)
    assert "abc" not in redacted
    assert "token=redacted" in redacted
    assert "clientID=rest" in redacted


def test_redact_url_leaves_plain_urls_alone():
    url = "https://datamanager.cachena.entrecode.de/api/83cc6374/muffin?_id=e1"
    assert redact_url(url) == url


def test_log_event_redacts_url_field_and_honours_level(caplog):
    log = logging.getLogger("ec_fdk.test")
    with caplog.at_level(logging.INFO, logger="ec_fdk.test"):
        log_event("skipped", logger=log, level=logging.DEBUG)
        log_event("fdk.request", logger=log, url="https://x/y?token=abc")

    assert [r.getMessage() for r in caplog.records] == ["fdk.request"]
    assert caplog.records[0].url == "https://x/y?token=redacted"
