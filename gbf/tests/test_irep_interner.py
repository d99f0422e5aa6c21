from gbf.api.irep.interner import StringInterner


def test_new_interner_is_empty():
    interner = StringInterner()
    assert len(interner) == 0
    assert interner.resolve(0) is None


def test_equal_strings_share_an_id():
    interner = StringInterner()
    first = interner.get_or_intern("hello")
    second = interner.get_or_intern("hel" + "lo")
    assert first == second
    assert len(interner) == 1


def test_distinct_strings_get_increasing_ids():
    interner = StringInterner()
    ids = [interner.get_or_intern(s) for s in ("a", "b", "c", "a", "d")]
    assert ids == [0, 1, 2, 0, 3]
    assert list(interner) == ["a", "b", "c", "d"]


def test_resolve_round_trips_issued_ids():
    interner = StringInterner()
    words = ["int", "symbol", "", "with\x00nul"]
    issued = {w: interner.get_or_intern(w) for w in words}
    for w, idx in issued.items():
        assert interner.resolve(idx) == w


def test_resolve_unknown_ids_is_none():
    interner = StringInterner()
    interner.get_or_intern("only")
    assert interner.resolve(1) is None
    assert interner.resolve(-1) is None


def test_get_and_contains_do_not_intern():
    interner = StringInterner()
    assert interner.get("missing") is None
    assert "missing" not in interner
    assert len(interner) == 0
    interner.get_or_intern("present")
    assert "present" in interner
    assert interner.get("present") == 0


def test_many_strings_expand():
    interner = StringInterner()
    for i in range(64):
        interner.get_or_intern(chr(ord("a") + i))
    assert len(interner) == 64
