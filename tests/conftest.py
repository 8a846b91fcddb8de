"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def sample_csv_file(tmp_path) -> Path:
    """Create a sample spreadsheet export with mixed cell types."""
    csv_content = """1,"Widget",true,2014-01-01,=A1*2
2,"Gadget, large",no,2014-01-02T10:44,
3,'It''s',null,,"=SUM(A1:A3)"
"""
    csv_file = tmp_path / "sample.csv"
    csv_file.write_text(csv_content, encoding="utf-8")
    return csv_file


@pytest.fixture
def sample_pipe_file(tmp_path) -> Path:
    """Create a pipe-delimited export with dd/mm/yyyy dates."""
    content = """A-1|21/09/2014|"10"
A-2|22/09/2014|"x"
"""
    pipe_file = tmp_path / "sample.txt"
    pipe_file.write_text(content, encoding="utf-8")
    return pipe_file


@pytest.fixture
def sample_config_file(tmp_path) -> Path:
    """Create a reader configuration for the pipe-delimited sample."""
    config = {
        "delimiter": "|",
        "numbered_text": True,
        "date_format": "%d/%m/%Y",
        "null_values": ["null", "N/A"],
    }
    config_file = tmp_path / "reader_config.json"
    config_file.write_text(json.dumps(config, indent=2))
    return config_file
