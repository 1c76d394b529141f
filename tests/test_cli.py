import json
import logging
from unittest.mock import patch

import pytest

from trackframe import cli

ANCHOR_RECORD = {
    "startLocation": {"type": "Point", "coordinates": [9.0, 45.0]},
    "endLocation": {"type": "Point", "coordinates": [9.2, 45.1]},
    "city": "Milano",
}


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging attaches a handler to the root logger; undo it per test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)


def write_record(tmp_path, record, name="track.json"):
    path = tmp_path / name
    path.write_text(json.dumps(record), encoding="utf-8")
    return path


def test_summary_without_map(tmp_path, capsys):
    track_file = write_record(tmp_path, ANCHOR_RECORD)

    cli.main([str(track_file), "--no-map"])

    out = capsys.readouterr().out
    assert "Path: 3 points (source: anchors)" in out
    assert "Start: 45.000000, 9.000000" in out
    assert "End: 45.100000, 9.200000" in out
    assert "Viewport: center 45.050000, 9.100000; span 0.1000 x 0.1000 deg" in out
    assert not (tmp_path / "track map.html").exists()


def test_placeholder_summary(tmp_path, capsys):
    track_file = write_record(tmp_path, {"city": "Milano"})

    cli.main([str(track_file), "--no-map"])

    out = capsys.readouterr().out
    assert "Path: 0 points (source: none)" in out
    assert "No location available: Milano" in out


def test_writes_map_with_generated_name(tmp_path):
    track_file = write_record(tmp_path, ANCHOR_RECORD)

    with patch("trackframe.cli.webbrowser.open") as mock_open:
        cli.main([str(track_file)])

    output = tmp_path / "track map.html"
    assert output.exists()
    assert "leaflet" in output.read_text(encoding="utf-8").lower()
    mock_open.assert_called_once()


def test_explicit_output_and_no_open(tmp_path):
    track_file = write_record(tmp_path, ANCHOR_RECORD)
    output = tmp_path / "custom.html"

    with patch("trackframe.cli.webbrowser.open") as mock_open:
        cli.main([str(track_file), "--output", str(output), "--no-open"])

    assert output.exists()
    mock_open.assert_not_called()


def test_custom_spans(tmp_path, capsys):
    track_file = write_record(tmp_path, ANCHOR_RECORD)

    cli.main([str(track_file), "--no-map", "--max-span", "1.0", "--padding", "0"])

    out = capsys.readouterr().out
    assert "span 0.1000 x 0.2000 deg" in out


def test_invalid_spans_exit(tmp_path):
    track_file = write_record(tmp_path, ANCHOR_RECORD)

    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(track_file), "--no-map", "--min-span", "0.5", "--max-span", "0.1"])
    assert exc_info.value.code == 1


def test_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(tmp_path / "missing.json"), "--no-map"])
    assert exc_info.value.code == 1


def test_invalid_json_exits(tmp_path):
    track_file = tmp_path / "broken.json"
    track_file.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(track_file), "--no-map"])
    assert exc_info.value.code == 1


def test_non_object_json_exits(tmp_path):
    track_file = write_record(tmp_path, [ANCHOR_RECORD])

    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(track_file), "--no-map"])
    assert exc_info.value.code == 1


def test_invalid_gpx_exits(tmp_path):
    track_file = tmp_path / "ride.gpx"
    track_file.write_text("<gpx", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(track_file), "--no-map"])
    assert exc_info.value.code == 1


def test_no_filename_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_metrics_are_logged(tmp_path, caplog):
    track_file = write_record(tmp_path, ANCHOR_RECORD)

    with caplog.at_level(logging.DEBUG, logger="trackframe"):
        cli.main([str(track_file), "--no-map", "--metrics", "--log-level", "DEBUG"])

    messages = [record.getMessage() for record in caplog.records]
    start = messages.index("=== TRACKFRAME_METRICS ===")
    end = messages.index("=== END_TRACKFRAME_METRICS ===")
    block = messages[start + 1 : end]
    assert "path_source=anchors" in block
    assert "path_points=3" in block
    assert "anchor[start]=1" in block
    assert "anchor[end]=1" in block
