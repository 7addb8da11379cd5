"""leaderboard output for a player store"""
import polars as pl
from glickoboard.store import Player, PlayerStore


def format_player_line(identifier: str, player: Player) -> str:
    """identifier followed by every model's display scale state, comma separated"""
    return ','.join([identifier] + [str(state) for state in player.ratings.values()])


def leaderboard_frame(store: PlayerStore) -> pl.DataFrame:
    """one row per player in leaderboard order, display scale rating, rd and sigma per model"""
    rows = []
    for identifier, player in store.leaderboard():
        row = {'player': identifier, 'last_update': player.last_update}
        for name, state in player.ratings.items():
            row[f'{name}_rating'] = state.rating
            row[f'{name}_rd'] = state.rd
            if hasattr(state, 'sigma'):
                row[f'{name}_sigma'] = state.sigma
        rows.append(row)
    if not rows:
        return pl.DataFrame({'player': []}, schema={'player': pl.Utf8})
    return pl.DataFrame(rows)


def write_report(store: PlayerStore, path):
    leaderboard_frame(store).write_csv(path)
