# ./cli/main.py

from __future__ import annotations
from pathlib import Path
from typing import Dict, Optional

import typer

from database.output import HistoryExporter, history_frame
from database.recorder import RunRecorder
from database.schema import SolverDatabase
from expression.parser import ExpressionError, make_function
from rootfinding.errors import InvalidBracketError
from rootfinding.methods import Method, RootSolver
from rootfinding.settings import DEFAULT_MAXITER, DEFAULT_TOL, RootSettings

app = typer.Typer(help="Nonlinear equation solver: bisection, Newton, secant, Broyden.")

BANNER = "\n".join([
    "=" * 46,
    " Nonlinear Equation Solver Calculator",
    " Methods: Bisection, Newton, Secant, Broyden",
    "=" * 46,
])


def _fail(message: str, code: int = 1):
    typer.echo(message, err=True)
    raise typer.Exit(code)


def _print_menu():
    typer.echo("Choose method")
    for m in Method:
        typer.echo(f"  {m.value}) {m.title}")


@app.command("methods")
def methods():
    """List the available methods and their menu codes."""
    _print_menu()


@app.command("solve")
def solve(
    expr: Optional[str] = typer.Option(None, "--expr", "-f", help="f(x), e.g. 'x^3 - x - 2'"),
    method: Optional[str] = typer.Option(None, "--method", "-m", help="1-4 or method name"),
    tol: float = typer.Option(DEFAULT_TOL, "--tol"),
    maxiter: int = typer.Option(DEFAULT_MAXITER, "--maxiter"),
    a: Optional[float] = typer.Option(None, "--a"),
    b: Optional[float] = typer.Option(None, "--b"),
    x0: Optional[float] = typer.Option(None, "--x0"),
    x1: Optional[float] = typer.Option(None, "--x1"),
    db: Optional[Path] = typer.Option(None, "--db", help="record the run in this SQLite file"),
    history_csv: Optional[Path] = typer.Option(None, "--history-csv", help="write iterates to CSV"),
):
    """Solve f(x) = 0 with one method; missing inputs are prompted for."""
    if expr is None:
        typer.echo(BANNER)
        typer.echo("\nPlease input f(x), e.g.\n    x^3 - x - 2\n    sin(x) - 0.5\n")
        expr = typer.prompt("f(x) =", prompt_suffix=" ")

    try:
        f = make_function(expr)
    except ExpressionError as e:
        _fail(str(e))

    if method is None:
        typer.echo()
        _print_menu()
        method = typer.prompt("Your choice =", prompt_suffix=" ")

    try:
        chosen = Method.parse(method)
    except ValueError:
        _fail("Invalid method choice.", code=2)

    try:
        settings = RootSettings(tol=tol, maxiter=maxiter)
    except ValueError as e:
        _fail(str(e))

    given: Dict[str, Optional[float]] = {"a": a, "b": b, "x0": x0, "x1": x1}
    labels = chosen.start_labels
    if any(given[label] is None for label in labels):
        typer.echo()
        typer.echo(chosen.hint)
    start = [
        given[label] if given[label] is not None else typer.prompt(f"{label} =", type=float, prompt_suffix=" ")
        for label in labels
    ]

    try:
        root, info = RootSolver(settings).solve(chosen, f, *start)
    except InvalidBracketError as e:
        _fail(str(e))
    except (ArithmeticError, ValueError) as e:
        _fail(f"Evaluating f failed: {e}")

    try:
        f_root = f(root)
    except (ArithmeticError, ValueError):
        f_root = float("nan")

    typer.echo(f"\n===== Result ({chosen.title}) =====")
    typer.echo(f"Root       ≈ {root}")
    typer.echo(f"f(root)    = {f_root}")
    typer.echo(f"Iterations = {info.iterations}")
    typer.echo(f"Converged  = {str(info.converged).lower()}")
    if not info.converged:
        typer.echo(f"Stopped    : {info.reason.value}")

    if history_csv is not None:
        history_csv.parent.mkdir(parents=True, exist_ok=True)
        history_frame(info).to_csv(history_csv, index=False)
        typer.echo(f"✓ History written to {history_csv}")

    if db is not None:
        store = SolverDatabase(str(db))
        conn = store.connect()
        try:
            store.initialize_schema()
            run_id = RunRecorder(conn).record(
                chosen, start, root, info, settings=settings,
                expression=expr, f_root=f_root
            )
            n = len(HistoryExporter(conn).history_frame(run_id))
        finally:
            store.close()
        typer.echo(f"✓ Recorded run #{run_id} ({n} iterates) in {db}")


if __name__ == "__main__":
    app()
