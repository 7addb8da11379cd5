"""
Driver that feeds batches of game records through a player store, one batch per input
file, reporting prediction stats after each batch.
"""
import sys
import logging
from typing import Iterable, List, Optional, Tuple
from tqdm import tqdm
from glickoboard.core.errors import ConvergenceFailure
from glickoboard.feeds import GameRecord, TimeControl
from glickoboard.stats import format_summary
from glickoboard.store import PlayerStore

logger = logging.getLogger('glickoboard')

PROGRESS_EVERY = 10000


def setup_logging(level=logging.INFO):
    if not logger.handlers:
        stream_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
    logger.setLevel(level)


def process_batch(
    name: str,
    records: Iterable[GameRecord],
    store: PlayerStore,
    time_control: TimeControl = TimeControl.BLITZ,
    progress: bool = True,
) -> int:
    """apply the useful records of one batch, returns how many were applied"""
    total = len(records) if hasattr(records, '__len__') else None
    logger.info(f'processing {name}' + (f' ({total} records)' if total is not None else ''))
    bar = tqdm(records, total=total, desc=name, disable=not progress, file=sys.stderr)
    applied = 0
    for counter, record in enumerate(bar, start=1):
        if record.is_useful(time_control):
            store.apply(record)
            applied += 1
        if counter % PROGRESS_EVERY == 0:
            bar.set_postfix(games=counter, players=store.player_count())
    bar.close()
    return applied


def process_batches(
    batches: Iterable[Tuple[str, Iterable[GameRecord]]],
    store: Optional[PlayerStore] = None,
    time_control: TimeControl = TimeControl.BLITZ,
    progress: bool = True,
    skip_failed_batches: bool = False,
) -> Tuple[PlayerStore, List[dict]]:
    """
    Run every batch through the store in order.

    Parameters:
        batches: (name, records) pairs, records in chronological order
        store (PlayerStore, optional): store to update, a fresh one with the default models if omitted
        time_control (TimeControl, optional): only games of this time control are rated. Defaults to blitz.
        progress (bool, optional): show a tqdm progress bar per batch. Defaults to True.
        skip_failed_batches (bool, optional): log and move on when a batch hits a ConvergenceFailure
            instead of raising. Games applied before the failure are kept. Defaults to False.

    Returns:
        (store, summaries): the store and one stats summary per completed batch
    """
    if store is None:
        store = PlayerStore()
    summaries = []
    for name, records in batches:
        try:
            process_batch(name, records, store, time_control=time_control, progress=progress)
        except ConvergenceFailure:
            if not skip_failed_batches:
                raise
            logger.exception(f'skipping the rest of {name}')
            store.stats_reset()
            continue
        summary = store.stats.summary()
        logger.info(format_summary(summary))
        summaries.append(summary)
        store.stats_reset()
    return store, summaries
