from college_hockey.cache import TTLCache


class Clock:
    def __init__(self):
        self.t = 1000.0

    def __call__(self):
        return self.t


def test_get_or_set_loads_once_until_expiry():
    clock = Clock()
    cache = TTLCache(clock=clock)
    loads = []

    def loader():
        loads.append(1)
        return {"n": len(loads)}

    assert cache.get_or_set("k", 60, loader) == {"n": 1}
    assert cache.get_or_set("k", 60, loader) == {"n": 1}

    clock.t += 61
    assert cache.get_or_set("k", 60, loader) == {"n": 2}
    assert len(loads) == 2


def test_none_results_are_not_cached():
    cache = TTLCache()
    calls = []

    def loader():
        calls.append(1)
        return None

    assert cache.get_or_set("missing", 60, loader) is None
    assert cache.get_or_set("missing", 60, loader) is None
    assert len(calls) == 2


def test_cleanup_and_clear():
    clock = Clock()
    cache = TTLCache(clock=clock)
    cache.set("a", 1, 10)
    cache.set("b", 2, 100)

    clock.t += 50
    assert cache.cleanup() == 1
    assert cache.get("a") is None
    assert cache.get("b") == 2

    cache.clear()
    assert cache.get("b") is None


def test_writes_drop_expired_entries():
    clock = Clock()
    cache = TTLCache(clock=clock)
    for day in range(1000):
        cache.set(f"scoreboard:men:{day}", {"day": day}, 60)

    clock.t += 61
    cache.set("scoreboard:men:live", {"live": True}, 60)
    assert len(cache) == 1
