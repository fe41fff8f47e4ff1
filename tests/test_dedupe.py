from bracket_harvester.dedupe import SeenUrls


def test_admit_only_first_sight() -> None:
    seen = SeenUrls()
    assert seen.admit("www.a.com") is True
    assert seen.admit("www.a.com") is False
    assert seen.admit("www.b.com") is True
    assert "www.a.com" in seen
    assert len(seen) == 2
