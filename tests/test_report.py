from datetime import datetime, timezone
import polars as pl
from glickoboard.feeds import GameRecord, Outcome, TimeControl
from glickoboard.report import format_player_line, leaderboard_frame, write_report
from glickoboard.store import PlayerStore

T0 = datetime(2022, 2, 2, tzinfo=timezone.utc)


def filled_store():
    store = PlayerStore()
    store.apply(GameRecord('alice', 'bob', Outcome.WHITE_WIN, T0, rated=True, time_control=TimeControl.BLITZ))
    return store


def test_leaderboard_frame():
    df = leaderboard_frame(filled_store())
    assert df['player'].to_list() == ['alice', 'bob']
    assert 'glicko_rating' in df.columns
    assert 'glicko_sigma' not in df.columns
    assert 'continuous_glicko2_sigma' in df.columns
    assert df['glicko2_rd'][0] < 350.0


def test_leaderboard_frame_empty():
    assert leaderboard_frame(PlayerStore()).height == 0


def test_write_report(tmp_path):
    path = tmp_path / 'report.csv'
    write_report(filled_store(), path)
    df = pl.read_csv(path)
    assert df['player'].to_list() == ['alice', 'bob']
    assert df.height == 2


def test_format_player_line():
    store = filled_store()
    line = format_player_line('alice', store.get('alice'))
    fields = line.split(',')
    assert fields[0] == 'alice'
    assert '±' in fields[1]
    # glicko, then rating, rd and sigma for both glicko 2 models
    assert len(fields) == 8
    assert 0.0 < float(fields[4]) < 0.1
