"""
Unit tests for the error record model and its rendering.
"""

import pytest

from errtrace import (
    CallSite,
    CauseKind,
    ErrorRecord,
    SentinelError,
    new_test_marker,
    wrap,
)
from errtrace.config import settings


@pytest.fixture
def site() -> CallSite:
    """Create a fixed call site for rendering tests."""
    return CallSite(file="/srv/app/storage/blocks.py", operation="storage.blocks.write_block", line=42)


@pytest.fixture
def record(site: CallSite) -> ErrorRecord:
    """Create a record wrapping a foreign error with one hop."""
    rec = ErrorRecord("disk full", cause=OSError("disk full"), site=site)
    rec.add_trace(site)
    return rec


def test_render_single_record(record: ErrorRecord):
    """Test the full rendering of a single record."""
    expected = (
        "File: /srv/app/storage/blocks.py\n"
        "Operation: storage.blocks.write_block\n"
        "Line: 42\n"
        "Message: disk full\n"
        'Error: "disk full"\n'
        "Trace: [\n"
        "File: /srv/app/storage/blocks.py; Operation: storage.blocks.write_block; Line: 42;\n"
        "]"
    )
    
    assert record.render() == expected
    assert str(record) == expected


def test_render_lists_every_hop_in_order(record: ErrorRecord):
    """Test that every trace entry is rendered on its own line, oldest first."""
    record.add_trace(CallSite(file="/srv/app/api.py", operation="api.upload", line=7))
    
    rendered = record.render()
    
    first = rendered.index("Operation: storage.blocks.write_block; Line: 42;")
    second = rendered.index("File: /srv/app/api.py; Operation: api.upload; Line: 7;")
    assert first < second
    assert rendered.endswith("Line: 7;\n]")


def test_render_has_no_side_effects(record: ErrorRecord):
    """Test that rendering repeatedly leaves the trace untouched."""
    before = record.trace
    
    assert record.render() == record.render()
    assert str(record) == record.render()
    assert record.trace == before


def test_render_quotes_cause_text(site: CallSite):
    """Test that the cause text is quoted and escaped."""
    rec = ErrorRecord('bad "name"', cause=ValueError('bad "name"'), site=site)
    
    assert 'Error: "bad \\"name\\""' in rec.render()


def test_render_short_paths(record: ErrorRecord, monkeypatch):
    """Test that short_paths renders only file basenames."""
    monkeypatch.setattr(settings, "short_paths", True)
    
    rendered = record.render()
    
    assert "File: blocks.py\n" in rendered
    assert "File: blocks.py; Operation:" in rendered
    assert record.file == "/srv/app/storage/blocks.py"


def test_trace_entry_format(record: ErrorRecord):
    """Test the formatted trace entry text."""
    assert record.trace == (
        "File: /srv/app/storage/blocks.py; Operation: storage.blocks.write_block; Line: 42;",
    )
    assert record.hops[0].line == 42


def test_fields_are_read_only(record: ErrorRecord):
    """Test that origin fields cannot be reassigned."""
    for name in ("file", "operation", "line", "message", "cause", "kind"):
        with pytest.raises(AttributeError):
            setattr(record, name, None)


def test_trace_views_are_snapshots(record: ErrorRecord):
    """Test that exposed traces are immutable copies."""
    trace = record.trace
    
    record.add_trace(CallSite())
    
    assert len(trace) == 1
    assert len(record.trace) == 2
    assert isinstance(record.hops, tuple)


def test_record_is_raisable(record: ErrorRecord):
    """Test that a record behaves as a plain exception."""
    with pytest.raises(ErrorRecord) as excinfo:
        raise record
    
    assert excinfo.value is record
    assert isinstance(record.__cause__, OSError)
    assert record.args == ("disk full",)


def test_is_match_is_structural():
    """Test that is_match only checks the target's type."""
    record = wrap(ValueError("one"))
    other = wrap(KeyError("two"))
    
    assert record.is_match(other)
    assert record.is_match(record)
    assert record.is_match(new_test_marker())
    assert not record.is_match(ValueError("one"))


def test_test_marker():
    """Test the marker record used as a match target."""
    marker = new_test_marker()
    
    assert marker.kind == CauseKind.TEST
    assert marker.message == "Test Error"
    assert isinstance(marker.unwrap(), SentinelError)
    assert marker.unwrap().kind == CauseKind.TEST
    assert not marker.is_aggregate_root
    assert marker.trace == ()
    assert 'Error: "Test Error"' in marker.render()


def test_sentinel_requires_non_foreign_kind():
    """Test that foreign errors have no sentinel."""
    with pytest.raises(ValueError):
        SentinelError(CauseKind.FOREIGN)


def test_list_kind_without_list_renders_as_single(site: CallSite):
    """Test that a LIST record lacking a list is not an aggregate root."""
    rec = ErrorRecord("Error List", cause=SentinelError(CauseKind.LIST), kind=CauseKind.LIST, site=site)
    
    assert not rec.is_aggregate_root
    assert rec.render().startswith("File: /srv/app/storage/blocks.py\n")


def test_repr(record: ErrorRecord):
    """Test the one-line debug representation."""
    assert repr(record) == (
        "ErrorRecord(kind=foreign, operation='storage.blocks.write_block', "
        "message='disk full', hops=1)"
    )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
