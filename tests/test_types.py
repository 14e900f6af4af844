"""Tests for the shared value types."""

from __future__ import annotations

import pytest

from qcoin.types import LabelSet, SourceSelector, Verdict, toggle_source


class TestSourceSelector:
    def test_values_match_provider_tags(self) -> None:
        assert SourceSelector.QR.value == "qr"
        assert SourceSelector.ANU.value == "anu"

    def test_toggled(self) -> None:
        assert SourceSelector.QR.toggled() is SourceSelector.ANU
        assert SourceSelector.ANU.toggled() is SourceSelector.QR

    def test_toggle_source_cycles_providers(self) -> None:
        assert toggle_source("qr") == "anu"
        assert toggle_source("anu") == "qr"

    def test_toggle_from_other_source_returns_to_default(self) -> None:
        assert toggle_source("system") == "qr"


class TestLabelSet:
    def test_defaults(self) -> None:
        labels = LabelSet()
        assert labels.label_for(Verdict.ONES) == "ONES"
        assert labels.label_for(Verdict.ZEROS) == "ZEROS"

    def test_custom_labels(self) -> None:
        labels = LabelSet(ones_label="Heads", zeros_label="Tails")
        assert labels.label_for(Verdict.ONES) == "Heads"
        assert labels.label_for(Verdict.ZEROS) == "Tails"

    def test_tie_label_is_fixed(self) -> None:
        labels = LabelSet(ones_label="Heads", zeros_label="Tails")
        assert labels.label_for(Verdict.TIE) == "TIE"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            LabelSet().ones_label = "x"  # type: ignore[misc]
