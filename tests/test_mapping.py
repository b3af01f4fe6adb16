"""Column mapping heuristics for uploaded lead sheets."""
import pytest

from outreach.ingestion.mapping import UNMAPPED, apply_overrides, parse_override, propose_mapping


def test_propose_mapping_turkish_headers():
    mapping = propose_mapping(["Firma", "Temsilci", "Tel", "Adres"])

    assert mapping["company"] == "Firma"
    assert mapping["representative"] == "Temsilci"
    assert mapping["phone"] == "Tel"
    assert mapping["country"] == "Adres"
    assert mapping["email"] == UNMAPPED
    assert mapping["website"] == UNMAPPED
    assert mapping["notes"] == UNMAPPED


def test_propose_mapping_is_case_insensitive_and_uses_substrings():
    mapping = propose_mapping(["COMPANY NAME", "Mobile Number", "E-Mail Address", "Website", "AÇIKLAMA"])

    assert mapping["company"] == "COMPANY NAME"
    assert mapping["phone"] == "Mobile Number"
    assert mapping["email"] == "E-Mail Address"
    assert mapping["website"] == "Website"
    assert mapping["notes"] == "AÇIKLAMA"


def test_first_matching_header_wins():
    mapping = propose_mapping(["Tel 1", "Tel 2"])

    assert mapping["phone"] == "Tel 1"


def test_no_headers_maps_everything_to_none():
    assert set(propose_mapping([]).values()) == {UNMAPPED}


def test_apply_overrides_replaces_single_field():
    mapping = propose_mapping(["Firma", "Tel", "Not"])
    updated = apply_overrides(mapping, {"notes": "Not", "phone": "none"})

    assert updated["notes"] == "Not"
    assert updated["phone"] == UNMAPPED
    assert updated["company"] == "Firma"
    assert mapping["phone"] == "Tel"


def test_apply_overrides_rejects_unknown_fields():
    with pytest.raises(ValueError, match="fax"):
        apply_overrides({}, {"fax": "Faks"})


def test_parse_override_splits_on_first_equals():
    assert parse_override("Notes=Açıklama = detay") == ("notes", "Açıklama = detay")

    with pytest.raises(ValueError):
        parse_override("notes")
