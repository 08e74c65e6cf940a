import pytest

from physiotrace.catalog import DEFAULT_LIBRARY, find_compound, metabolic_crowding, search_library


def test_library_contents():
    ids = [c.compound_id for c in DEFAULT_LIBRARY]
    assert len(ids) == 11
    assert len(set(ids)) == 11
    assert ids[0] == "caffeine"


def test_find_compound():
    caffeine = find_compound("caffeine")
    assert caffeine.half_life_h == 5.0
    assert caffeine.tox_threshold_mg_per_L == 60.0
    assert caffeine.metabolism == "neurological"

    with pytest.raises(KeyError):
        find_compound("unobtainium")


def test_search_matches_name_or_category_ignoring_case():
    assert [c.compound_id for c in search_library("CAFF")] == ["caffeine"]
    assert {c.compound_id for c in search_library("analgesic")} == {"ibuprofen", "paracetamol", "aspirin"}
    # display name, not id
    assert [c.compound_id for c in search_library("acetaminophen")] == ["paracetamol"]
    assert search_library("") == DEFAULT_LIBRARY
    assert search_library("zzz") == ()


def test_search_custom_library():
    subset = DEFAULT_LIBRARY[:2]
    assert len(search_library("stimulant", subset)) == 2


def test_metabolic_crowding():
    caffeine = find_compound("caffeine")
    paracetamol = find_compound("paracetamol")
    melatonin = find_compound("melatonin")
    sertraline = find_compound("sertraline")

    assert metabolic_crowding([]) is None
    assert metabolic_crowding([caffeine, paracetamol]) is None
    assert metabolic_crowding([caffeine, paracetamol, melatonin]) == "neurological"
    assert metabolic_crowding([paracetamol, caffeine, sertraline, melatonin]) == "hepatic"
