import logging

from geoserver_rest_client.logging import LogfmtFormatter
from geoserver_rest_client.observability import EVENT_LOGGER, event_fields, log_event


def _record(msg, **extra):
    record = logging.LogRecord("geoserver", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def _logged_event(caplog, event, **fields):
    with caplog.at_level(logging.INFO, logger=EVENT_LOGGER):
        log_event(event, **fields)
    return caplog.records[-1]


def test_logfmt_formats_request_fields_in_order():
    line = LogfmtFormatter().format(
        _record(
            "geoserver.request",
            duration_ms=12,
            status=201,
            method="POST",
            operation="workspaces.create",
        )
    )

    assert line == (
        "level=info logger=geoserver event=geoserver.request "
        "operation=workspaces.create method=POST status=201 duration_ms=12"
    )


def test_logfmt_quotes_values_with_spaces():
    line = LogfmtFormatter().format(_record("store deleted", resource='my "store"'))

    assert 'event="store deleted"' in line
    assert 'resource="my \\"store\\""' in line


def test_logfmt_renders_store_deletion_fields(caplog):
    record = _logged_event(
        caplog,
        "store_deleted",
        workspace="ws",
        resource="roads",
        store_type="datastores",
        recurse=False,
    )

    assert LogfmtFormatter().format(record) == (
        "level=info logger=geoserver_rest_client.observability event=store_deleted "
        "recurse=False resource=roads store_type=datastores workspace=ws"
    )


def test_logfmt_renders_granule_location(caplog):
    record = _logged_event(
        caplog, "granule_deleted", workspace="ws", resource="temperature", location="/a.tif"
    )

    line = LogfmtFormatter().format(record)
    assert "location=/a.tif" in line
    assert line.count("event=") == 1


def test_log_event_prefixes_reserved_keys(caplog):
    record = _logged_event(caplog, "workspace_deleted", workspace="ws", name="clash", recurse=True)

    assert record.event == "workspace_deleted"
    assert record.workspace == "ws"
    assert record.recurse is True
    assert record.field_name == "clash"
    assert record.name == EVENT_LOGGER


def test_event_fields_drop_none():
    assert event_fields({"workspace": None, "resource": "line", "msg": "x"}) == {
        "resource": "line",
        "field_msg": "x",
    }
