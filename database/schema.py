"""Database schema for storing solver runs and their iterate history using SQLite."""

import sqlite3
from pathlib import Path
from typing import Optional
from contextlib import contextmanager


class SolverDatabase:
    """Embedded SQLite store of solver runs"""

    def __init__(self, db_path: str = "solver_runs.db"):
        self.db_path = Path(db_path)
        self.conn: Optional[sqlite3.Connection] = None

    def connect(self):
        """Establish database connection"""
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON")
        return self.conn

    def close(self):
        """Close database connection"""
        if self.conn:
            self.conn.close()
            self.conn = None

    @contextmanager
    def transaction(self):
        """Context manager for transactions"""
        opened_here = self.conn is None
        conn = self.connect() if opened_here else self.conn
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            if opened_here:  # Only close if we opened it
                self.close()

    def initialize_schema(self):
        """Create all tables if they don't exist"""
        with self.transaction() as conn:
            cursor = conn.cursor()

            # One row per solver call
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS solve_runs (
                    run_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    expression TEXT,
                    method TEXT NOT NULL,
                    tol REAL NOT NULL,
                    maxiter INTEGER NOT NULL,
                    start_1 REAL NOT NULL,
                    start_2 REAL,
                    root REAL,
                    f_root REAL,
                    converged INTEGER NOT NULL,
                    iterations INTEGER NOT NULL,
                    evaluations INTEGER NOT NULL DEFAULT 0,
                    reason TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    CONSTRAINT valid_method CHECK (method IN ('bisection', 'newton', 'secant', 'broyden')),
                    CONSTRAINT valid_tol CHECK (tol > 0),
                    CONSTRAINT valid_maxiter CHECK (maxiter >= 1),
                    CONSTRAINT valid_iterations CHECK (iterations >= 0)
                )
            """)

            # Iterates in evaluation order; step starts at 0
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS iterates (
                    run_id INTEGER NOT NULL,
                    step INTEGER NOT NULL,
                    x REAL,
                    FOREIGN KEY (run_id) REFERENCES solve_runs(run_id) ON DELETE CASCADE,
                    PRIMARY KEY (run_id, step)
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_runs_method
                ON solve_runs(method)
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_runs_created
                ON solve_runs(created_at)
            """)

            # Run overview with history length
            cursor.execute("""
                CREATE VIEW IF NOT EXISTS run_summary AS
                SELECT
                    r.run_id,
                    r.created_at,
                    r.expression,
                    r.method,
                    r.tol,
                    r.maxiter,
                    r.start_1,
                    r.start_2,
                    r.root,
                    r.f_root,
                    r.converged,
                    r.iterations,
                    r.evaluations,
                    r.reason,
                    COUNT(i.step) AS history_length
                FROM solve_runs r
                LEFT JOIN iterates i ON i.run_id = r.run_id
                GROUP BY r.run_id
            """)

            print(f"✓ Database schema initialized at {self.db_path}")

    def drop_all_tables(self):
        """Drop all tables (use with caution!)"""
        with self.transaction() as conn:
            cursor = conn.cursor()
            cursor.execute("DROP VIEW IF EXISTS run_summary")
            cursor.execute("DROP TABLE IF EXISTS iterates")
            cursor.execute("DROP TABLE IF EXISTS solve_runs")
            print("✓ All tables dropped")
