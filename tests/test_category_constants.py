import pytest

from usagechart.services.category_constants import OTHER_LABEL, normalize_category


@pytest.mark.parametrize("raw", [None, "", "   ", "\t\n", "other", "Other", "OTHER", "others", "OTHERS", "oThErS"])
def test_collapses_to_other(raw):
    assert normalize_category(raw) == OTHER_LABEL == "Other"


@pytest.mark.parametrize("raw", ["Social", "social", "System", "Other stuff", "Health & Fitness"])
def test_keeps_other_values_verbatim(raw):
    assert normalize_category(raw) == raw


@pytest.mark.parametrize("raw", [None, "OTHERS", "Social", "productivity"])
def test_is_idempotent(raw):
    once = normalize_category(raw)
    assert normalize_category(once) == once
