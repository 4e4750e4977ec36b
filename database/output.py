"""Output utilities for exporting solver runs and iterate histories."""

import sqlite3
import pandas as pd
from pathlib import Path
from typing import Optional, List
from datetime import datetime

from custom_types.types import ScalarFunction
from rootfinding.result import SolveInfo


def history_frame(info: SolveInfo, f: Optional[ScalarFunction] = None) -> pd.DataFrame:
    """
    In-memory history as a DataFrame with columns step, x (and fx when f is given).

    fx re-evaluates f at every iterate, so only pass f when that is cheap.
    """
    df = pd.DataFrame({"step": range(len(info.history)), "x": info.history_array})
    if f is not None:
        df["fx"] = [float(f(x)) for x in info.history]
    return df


class HistoryExporter:
    """Export stored runs to various formats"""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def runs_frame(
            self,
            run_ids: Optional[List[int]] = None,
            methods: Optional[List[str]] = None,
            converged_only: bool = False
    ) -> pd.DataFrame:
        """Run overview rows matching the filters"""
        query = "SELECT * FROM run_summary WHERE 1=1"
        params = []

        if run_ids:
            placeholders = ','.join('?' * len(run_ids))
            query += f" AND run_id IN ({placeholders})"
            params.extend(run_ids)

        if methods:
            placeholders = ','.join('?' * len(methods))
            query += f" AND method IN ({placeholders})"
            params.extend(m.lower() for m in methods)

        if converged_only:
            query += " AND converged = 1"

        query += " ORDER BY run_id"

        return pd.read_sql_query(query, self.conn, params=params)

    def history_frame(self, run_id: int) -> pd.DataFrame:
        """Iterates of one run in evaluation order"""
        return pd.read_sql_query(
            "SELECT step, x FROM iterates WHERE run_id = ? ORDER BY step",
            self.conn, params=[run_id]
        )

    def to_csv(self, output_path: str, run_ids: Optional[List[int]] = None):
        """Export iterate histories (long format: run_id, method, step, x) to CSV"""
        query = """
            SELECT i.run_id, r.method, r.expression, i.step, i.x
            FROM iterates i
            JOIN solve_runs r ON r.run_id = i.run_id
            WHERE 1=1
        """
        params = []
        if run_ids:
            placeholders = ','.join('?' * len(run_ids))
            query += f" AND i.run_id IN ({placeholders})"
            params.extend(run_ids)
        query += " ORDER BY i.run_id, i.step"

        df = pd.read_sql_query(query, self.conn, params=params)

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False)
        print(f"✓ Exported {len(df)} iterates to {output_path}")

    def to_summary_report(self, output_path: str, methods: Optional[List[str]] = None):
        """Generate a summary report text file"""
        runs_df = self.runs_frame(methods=methods)

        if runs_df.empty:
            print("No runs to export")
            return

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write("=" * 70 + "\n")
            f.write("NONLINEAR SOLVER - RUN SUMMARY REPORT\n")
            f.write("=" * 70 + "\n")
            f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write(f"Total Runs: {len(runs_df)}\n")
            f.write("\n")

            for method in runs_df['method'].unique():
                method_df = runs_df[runs_df['method'] == method]
                converged = method_df[method_df['converged'] == 1]

                f.write("-" * 70 + "\n")
                f.write(f"METHOD: {method}\n")
                f.write("-" * 70 + "\n")
                f.write(f"Runs: {len(method_df)}\n")
                f.write(f"Converged: {len(converged)}\n")
                f.write(f"Average iterations: {method_df['iterations'].mean():.2f}\n")
                f.write(f"Average evaluations: {method_df['evaluations'].mean():.2f}\n")
                f.write("\n")

                for _, row in method_df.iterrows():
                    f.write(f"  #{row['run_id']} {row['expression'] or '<callable>'}: "
                            f"root={row['root']} "
                            f"iterations={row['iterations']} ({row['reason']})\n")
                f.write("\n")

        print(f"✓ Summary report written to {output_path}")
