from gridracer.render.replay import ReplayCursor


def test_manual_stepping_clamps_to_trace() -> None:
    cursor = ReplayCursor(length=3)
    assert not cursor.active

    cursor.step()
    assert cursor.index == 0
    cursor.step()
    cursor.step()
    cursor.step()
    assert cursor.index == 2
    assert cursor.at_end

    cursor.back()
    assert cursor.index == 1
    cursor.back()
    cursor.back()
    assert cursor.index == 0


def test_tick_respects_delay_and_stops_at_end() -> None:
    cursor = ReplayCursor(length=2, tick_delay=0.5)
    cursor.play()
    started = cursor.last_tick

    assert not cursor.tick(now=started + 0.1)
    assert cursor.tick(now=started + 0.6)
    assert cursor.index == 0
    assert cursor.tick(now=started + 1.2)
    assert cursor.index == 1
    assert not cursor.playing
    assert not cursor.tick(now=started + 2.0)


def test_play_from_end_restarts() -> None:
    cursor = ReplayCursor(length=2)
    cursor.seek(5)
    assert cursor.index == 1

    cursor.play()
    assert cursor.index == -1
    assert cursor.playing


def test_empty_trace_never_activates() -> None:
    cursor = ReplayCursor(length=0)
    cursor.play()
    cursor.step()
    cursor.seek(3)

    assert not cursor.playing
    assert not cursor.active


def test_reset_and_toggle() -> None:
    cursor = ReplayCursor(length=4)
    cursor.seek(2)
    cursor.toggle()
    assert cursor.playing
    cursor.toggle()
    assert not cursor.playing

    cursor.reset()
    assert cursor.index == -1


def test_back_on_inactive_cursor_stays_inactive() -> None:
    cursor = ReplayCursor(length=5)
    cursor.back()
    assert cursor.index == -1
    assert not cursor.active
