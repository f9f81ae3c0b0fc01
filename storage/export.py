from __future__ import annotations

import csv
from pathlib import Path
from typing import List

import numpy as np

from ews.model import TransitionsResult


class ResultExporter:
    """Write a transitions result as a CSV table, one row per change-metric time point."""

    def __init__(self, csv_path: Path) -> None:
        self.csv_path = csv_path
        self.csv_path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, result: TransitionsResult, flags: np.ndarray) -> int:
        if flags.shape != (len(result.t_change), result.n_metrics + 1):
            raise ValueError(
                f"Flag matrix of shape {flags.shape} does not match result with "
                f"{len(result.t_change)} points and {result.n_metrics} metrics"
            )
        rows: List[List[object]] = []
        for idx, t in enumerate(result.t_change):
            row: List[object] = [float(t)]
            for col in range(result.n_metrics):
                row.extend(
                    [
                        float(result.x_change[idx, col]),
                        float(result.pvalues[idx, col]),
                        int(flags[idx, col]),
                    ]
                )
            row.append(int(flags[idx, -1]))
            rows.append(row)
        with self.csv_path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(self._header(result))
            writer.writerows(rows)
        return len(rows)

    @staticmethod
    def _header(result: TransitionsResult) -> List[str]:
        header = ["t_change"]
        for indicator, metric in zip(result.indicator_names, result.change_metric_names):
            label = f"{metric}_{indicator}"
            header.extend([f"{label}_change", f"{label}_pvalue", f"{label}_flag"])
        header.append("all_flag")
        return header
