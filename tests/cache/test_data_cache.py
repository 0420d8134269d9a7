from hr_payroll.cache.data_cache import DataCache, cache_key, scope_pattern


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_get_returns_value_before_ttl_elapses():
    clock = FakeClock()
    cache = DataCache(clock=clock)
    value = {"total": 22000.0}

    cache.set("report:c1:2026-06", value, ttl=300)
    clock.now += 299

    assert cache.get("report:c1:2026-06") is value


def test_expired_entry_is_removed_on_read():
    clock = FakeClock()
    cache = DataCache(clock=clock)
    cache.set("k", 1, ttl=60)

    clock.now += 61

    assert cache.get("k") is None
    assert len(cache) == 0


def test_default_ttl_applies_when_not_given():
    clock = FakeClock()
    cache = DataCache(default_ttl=10, clock=clock)
    cache.set("k", "v")

    clock.now += 5
    assert cache.get("k") == "v"
    clock.now += 6
    assert cache.get("k") is None


def test_invalidate_exact_key_then_get_is_none():
    cache = DataCache()
    cache.set("report:c1:2026-06", "v", ttl=300)

    cache.invalidate("report:c1:2026-06")

    assert cache.get("report:c1:2026-06") is None


def test_invalidate_by_substring_keeps_other_keys():
    cache = DataCache()
    cache.set(cache_key("report", "c1", "2026-06"), 1)
    cache.set(cache_key("report", "c1", "2026-07"), 2)
    cache.set(cache_key("report", "c2", "2026-06"), 3)

    removed = cache.invalidate(scope_pattern("c1", "2026-06"))

    assert removed == 1
    assert cache.get("report:c1:2026-07") == 2
    assert cache.get("report:c2:2026-06") == 3


def test_scope_pattern_does_not_match_company_with_common_suffix():
    cache = DataCache()
    cache.set(cache_key("report", "xc1", "2026-06"), 1)
    cache.set(cache_key("report", "c1", "2026-06"), 2)

    cache.invalidate(scope_pattern("c1"))

    assert cache.get("report:xc1:2026-06") == 1
    assert cache.get("report:c1:2026-06") is None


def test_invalidate_without_pattern_clears_everything():
    cache = DataCache()
    cache.set("a", 1)
    cache.set("b", 2)

    assert cache.invalidate() == 2
    assert len(cache) == 0


def test_separate_instances_do_not_share_entries():
    first, second = DataCache(), DataCache()
    first.set("k", 1)

    assert second.get("k") is None


def test_cache_key_joins_parts():
    assert cache_key("calendar", "c1", "2026-06") == "calendar:c1:2026-06"
    assert cache_key("salary", "c1", "2026-06", 7) == "salary:c1:2026-06:7"


def test_expiry_tolerates_entry_removed_concurrently():
    state = {"now": 1000.0, "cache": None}

    def clock() -> float:
        # Another request drops the entry between the lookup and the expiry check.
        if state["now"] > 1000.0:
            state["cache"].invalidate("k")
        return state["now"]

    cache = DataCache(default_ttl=60, clock=clock)
    state["cache"] = cache
    cache.set("k", 1)
    state["now"] += 61

    assert cache.get("k") is None
    assert len(cache) == 0


def test_invalidate_counts_only_entries_it_removed():
    cache = DataCache(clock=FakeClock())
    cache.set("report:c1:2026-06", 1)
    cache.set("report:c1:2026-07", 2)
    cache.set("report:c2:2026-06", 3)

    assert cache.invalidate(scope_pattern("c1")) == 2
    assert cache.invalidate(scope_pattern("c1")) == 0
    assert len(cache) == 1
