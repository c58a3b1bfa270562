"""Nox automation for jsminifier development tasks."""

from pathlib import Path

import nox

# Default sessions to run
nox.options.sessions = ["lint", "test"]


@nox.session(python=["3.11", "3.12", "3.13"])
def test(session: nox.Session) -> None:
    """Run the test suite with coverage."""
    session.install("pytest", "pytest-cov")
    session.install("-e", ".")
    session.run(
        "pytest",
        "--cov=jsminifier",
        "--cov-report=term-missing",
        "--cov-fail-under=80",
        "-q",
        *session.posargs,
    )


@nox.session(python="3.11")
def lint(session: nox.Session) -> None:
    """Run linting with ruff and black."""
    session.install("ruff", "black")
    session.run("ruff", "check", ".")
    session.run("black", "--check", ".")


@nox.session(python="3.11")
def typecheck(session: nox.Session) -> None:
    """Run type checking with mypy."""
    session.install("mypy")
    session.install("-e", ".")
    session.run("mypy", "jsminifier")


@nox.session(python=False)
def smoke(session: nox.Session) -> None:
    """Minify a small script and page through the CLI without virtualenv."""
    root = Path("runs") / "smoke"
    root.mkdir(parents=True, exist_ok=True)

    (root / "app.js").write_text(
        "/*! smoke */\n"
        "// greeting\n"
        "function greet(name) {\n"
        "    return 'Hello, ' + name + '!';\n"
        "}\n"
    )
    (root / "index.html").write_text(
        "<html>\n<body>\n"
        "<script>\n  var total = 1 + 2; // sum\n</script>\n"
        "</body>\n</html>\n"
    )

    session.run(
        "python", "-m", "jsminifier.cli.minify", "js", str(root / "app.js"),
        "--out", str(root / "app.min.js"), "--stats", "--no-emoji",
    )
    session.run(
        "python", "-m", "jsminifier.cli.minify", "html", str(root / "index.html"),
        "--out", str(root / "index.min.html"), "--record", str(root / "record.json"),
        "--no-emoji",
    )

    session.log("Smoke test passed!")


@nox.session(python=False)
def clean(session: nox.Session) -> None:
    """Clean up generated files and caches."""
    import shutil

    paths_to_remove = [
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".coverage",
        "htmlcov",
        ".nox",
        "dist",
        "build",
        "runs",
        "*.egg-info",
    ]

    for pattern in paths_to_remove:
        for path in Path(".").glob(pattern):
            session.log(f"Removing {path}")
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()
