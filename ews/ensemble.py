from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Sequence, Tuple

import numpy as np

from surrogates.registry import make_generator

from .evolution import WindowGeometry, evolve_into
from .model import MetricPair, Tail, TransitionsConfig

LOGGER = logging.getLogger(__name__)

LaneCounts = Tuple[np.ndarray, np.ndarray]


def lane_seeds(rng_seed: int | None, n_lanes: int) -> List[int]:
    """Draw one seed per lane from the master stream, all at once and in lane order."""
    master = np.random.default_rng(rng_seed)
    return [int(seed) for seed in master.integers(1, 2**63 - 1, size=n_lanes)]


class SurrogateEnsemble:
    """Surrogate null distribution of the change metrics of one input series.

    Each lane owns a surrogate generator, its scratch buffers and its counters.
    Lane ``k`` handles surrogates ``k, k + n_lanes, ...`` so the result only
    depends on the master seed and the lane count, not on thread scheduling.
    Generators live as long as the ensemble, so successive pairs keep drawing
    from the same lane streams.
    """

    def __init__(self, x: Sequence[float], config: TransitionsConfig) -> None:
        self.x = np.asarray(x, dtype=float)
        self.config = config
        self.geometry = WindowGeometry.from_config(config)
        self.len_ind, self.len_cha = self.geometry.lengths(len(self.x))
        self.seeds = lane_seeds(config.rng_seed, config.n_lanes)
        self.generators = [
            make_generator(config.surrogate_method, self.x, seed) for seed in self.seeds
        ]

    @property
    def n_lanes(self) -> int:
        return len(self.generators)

    def pvalues(self, pair: MetricPair, observed: np.ndarray) -> np.ndarray:
        """Fraction of surrogates more extreme than ``observed`` at every time index.

        With ``tail == both`` this is twice the smaller one-sided fraction and
        may exceed 1.
        """
        if len(observed) != self.len_cha:
            raise ValueError(f"Observed change metric has length {len(observed)}, expected {self.len_cha}")
        abort = threading.Event()
        with ThreadPoolExecutor(max_workers=self.n_lanes, thread_name_prefix="surrogate-lane") as executor:
            futures = [
                executor.submit(self._run_lane, lane, pair, observed, abort)
                for lane in range(self.n_lanes)
            ]
            wait(futures)
        lane_counts = [future.result() for future in futures]

        right = np.zeros(self.len_cha, dtype=np.int64)
        left = np.zeros(self.len_cha, dtype=np.int64)
        for lane_right, lane_left in lane_counts:
            right += lane_right
            left += lane_left

        tail = self.config.tail
        if tail == Tail.RIGHT:
            counts = right
        elif tail == Tail.LEFT:
            counts = left
        else:
            counts = 2 * np.minimum(right, left)
        return counts / self.config.n_surrogates

    def _run_lane(
        self,
        lane: int,
        pair: MetricPair,
        observed: np.ndarray,
        abort: threading.Event,
    ) -> LaneCounts:
        generator = self.generators[lane]
        scratch_ind = np.empty(self.len_ind, dtype=float)
        scratch_cha = np.empty(self.len_cha, dtype=float)
        right = np.zeros(self.len_cha, dtype=np.int64)
        left = np.zeros(self.len_cha, dtype=np.int64)
        tail = self.config.tail
        done = 0
        try:
            for _ in range(lane, self.config.n_surrogates, self.n_lanes):
                if abort.is_set():
                    break
                surrogate = generator()
                evolve_into(
                    surrogate,
                    pair.indicator,
                    pair.change_metric,
                    self.geometry,
                    scratch_ind,
                    scratch_cha,
                )
                if tail != Tail.LEFT:
                    right += observed < scratch_cha
                if tail != Tail.RIGHT:
                    left += observed > scratch_cha
                done += 1
        except Exception:
            abort.set()
            raise
        LOGGER.debug("Lane %d finished %d surrogates for %s", lane, done, pair.label)
        return right, left
