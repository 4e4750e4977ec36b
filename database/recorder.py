"""Persist solver results into the run database."""

import math
import sqlite3
from typing import Any, Dict, List, Optional, Sequence, Union

from rootfinding.methods import Method
from rootfinding.result import SolveInfo
from rootfinding.settings import RootSettings


def _nullable(value: Optional[float]) -> Optional[float]:
    # SQLite stores NaN as NULL anyway; make it explicit
    if value is None or math.isnan(value):
        return None
    return value


class RunRecorder:
    """Write runs and their iterate history"""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def record(
            self,
            method: Union[Method, int, str],
            start: Sequence[float],
            root: float,
            info: SolveInfo,
            settings: RootSettings = RootSettings(),
            expression: Optional[str] = None,
            f_root: Optional[float] = None
    ) -> int:
        """Insert one run plus its history, return run_id"""
        method = Method.parse(method)
        if len(start) != len(method.start_labels):
            raise ValueError(
                f"{method.title} run needs {len(method.start_labels)} starting value(s), got {len(start)}"
            )
        start_2 = start[1] if len(start) > 1 else None

        cursor = self.conn.cursor()
        cursor.execute("""
            INSERT INTO solve_runs (
                expression, method, tol, maxiter, start_1, start_2,
                root, f_root, converged, iterations, evaluations, reason
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            expression,
            method.name.lower(),
            settings.tol, settings.maxiter,
            float(start[0]), start_2,
            _nullable(root), _nullable(f_root),
            int(info.converged), info.iterations, info.evaluations,
            info.reason.value
        ))
        run_id = cursor.lastrowid

        cursor.executemany(
            "INSERT INTO iterates (run_id, step, x) VALUES (?, ?, ?)",
            [(run_id, step, x) for step, x in enumerate(info.history)]
        )

        self.conn.commit()
        return run_id

    def record_batch(self, runs: List[Dict[str, Any]]) -> List[int]:
        """Insert multiple runs, return list of run_ids"""
        return [self.record(**run) for run in runs]

    def delete_run(self, run_id: int) -> None:
        cursor = self.conn.cursor()
        cursor.execute("DELETE FROM iterates WHERE run_id = ?", (run_id,))
        cursor.execute("DELETE FROM solve_runs WHERE run_id = ?", (run_id,))
        self.conn.commit()
