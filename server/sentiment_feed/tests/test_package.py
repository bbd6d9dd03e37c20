"""Tests for the sentiment_feed package module."""
import warnings
from pathlib import Path

import sentiment_feed


def test_package_source_compiles_without_escape_warnings():
    path = Path(sentiment_feed.__file__)

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(path.read_text(), str(path), "exec")

    assert "+--miss-->" in sentiment_feed.__doc__
