from datetime import datetime, timedelta, timezone

from app.domain import contains, extract_windows, nearly_equal, reconcile_windows, split_windows
from app.models import ComfortPolicy, HourlySample, Window


def _at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2025, 6, 2, hour, minute, second, tzinfo=timezone.utc)


def _window(start: datetime, end: datetime, **extra) -> Window:
    return Window(
        start=start,
        end=end,
        min_temperature_c=18.0,
        max_temperature_c=23.0,
        max_humidity_pct=50.0,
        max_uv_index=4.0,
        max_cloud_cover_pct=20.0,
        **extra,
    )


def test_containment_is_inclusive():
    outer = _window(_at(9), _at(15))
    assert contains(outer, _window(_at(10), _at(14)))
    assert contains(outer, _window(_at(9), _at(15)))
    assert not contains(outer, _window(_at(8), _at(14)))


def test_near_equality_tolerance_is_strict():
    base = _window(_at(10), _at(14))
    assert nearly_equal(base, _window(_at(10, 0, 59), _at(13, 59, 1)))
    assert not nearly_equal(base, _window(_at(10, 1), _at(14)))


def test_containment_match_carries_plan():
    previous = [_window(_at(10), _at(14), plan="Hike")]
    fresh = [_window(_at(9), _at(15))]

    result = reconcile_windows(fresh, previous)

    assert len(result) == 1
    assert (result[0].start, result[0].end) == (_at(9), _at(15))
    assert result[0].plan == "Hike"
    assert result[0].id == previous[0].id


def test_near_equal_match_carries_skip():
    previous = [_window(_at(10), _at(14), skipped=True)]
    # Fresh window is slightly narrower, so containment does not apply.
    fresh = [_window(_at(10, 0, 30), _at(13, 59, 30))]

    result = reconcile_windows(fresh, previous)

    assert result[0].skipped is True
    assert result[0].plan is None


def test_first_previous_match_wins():
    previous = [
        _window(_at(10), _at(11), plan="Coffee"),
        _window(_at(12), _at(13), plan="Lunch"),
    ]
    fresh = [_window(_at(9), _at(14))]

    result = reconcile_windows(fresh, previous)

    assert result[0].plan == "Coffee"
    # Both previous windows sit inside the fresh one, so neither is orphaned.
    assert len(result) == 1


def test_orphan_annotated_window_is_retained():
    orphan = _window(_at(10), _at(11), skipped=True)
    fresh = [_window(_at(15), _at(18)), _window(_at(20), _at(22))]

    result = reconcile_windows(fresh, [orphan])

    assert result[:2] == fresh
    assert result[2] is orphan
    assert all(w.plan is None and not w.skipped for w in result[:2])


def test_unannotated_previous_windows_are_dropped():
    previous = [_window(_at(1), _at(3)), _window(_at(10), _at(12))]
    fresh = [_window(_at(5), _at(8)), _window(_at(15), _at(16))]

    result = reconcile_windows(fresh, previous)

    assert result == fresh


def test_partial_overlap_is_not_a_match():
    previous = [_window(_at(8), _at(12), plan="Run")]
    fresh = [_window(_at(10), _at(14))]

    result = reconcile_windows(fresh, previous)

    assert result[0].plan is None
    assert result[1].plan == "Run"
    assert len(result) == 2


def test_orphans_keep_previous_order():
    previous = [
        _window(_at(1), _at(2), plan="A"),
        _window(_at(3), _at(4), plan="B"),
    ]

    result = reconcile_windows([], previous)

    assert [w.plan for w in result] == ["A", "B"]


def test_empty_inputs():
    assert reconcile_windows([], []) == []


def test_pipeline_without_band_or_history_is_identity():
    policy = ComfortPolicy(
        min_temperature_c=10.0,
        max_temperature_c=30.0,
        max_humidity_pct=80.0,
        max_uv_index=8.0,
        max_cloud_cover_pct=100.0,
        allow_precipitation=True,
    )
    samples = [
        HourlySample(time=_at(0) + timedelta(hours=i), temperature_c=t)
        for i, t in enumerate([20.0, 21.0, 40.0, 19.0, 18.0, 5.0, 22.0])
    ]

    extracted = extract_windows(samples, policy)
    result = reconcile_windows(split_windows(extracted, None), [])

    assert result == extracted


def test_unannotated_match_keeps_previous_id():
    previous = [_window(_at(10), _at(14))]
    fresh = [_window(_at(10), _at(14))]

    result = reconcile_windows(fresh, previous)

    assert [w.id for w in result] == [previous[0].id]


def test_previous_id_is_claimed_once():
    # A zero-length window on a slice boundary sits inside both slices.
    previous = [_window(_at(9), _at(9), plan="Call")]
    fresh = [_window(_at(7), _at(9)), _window(_at(9), _at(12))]

    result = reconcile_windows(fresh, previous)

    assert [w.plan for w in result] == ["Call", "Call"]
    assert result[0].id == previous[0].id
    assert result[1].id == fresh[1].id
    assert len({w.id for w in result}) == 2


def test_unmatched_fresh_window_keeps_its_own_id():
    previous = [_window(_at(1), _at(2))]
    fresh = [_window(_at(5), _at(8))]

    assert [w.id for w in reconcile_windows(fresh, previous)] == [fresh[0].id]
