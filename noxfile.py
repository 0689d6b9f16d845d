import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

# psycopg2 ships a compiled extension; a cached wheel may target another interpreter
_REBUILD = ["psycopg2-binary"]

# Test directories addressable through `nox -s suite -- <layer>`
_LAYERS = {
    "domain": "tests/storefront/domain/",
    "application": "tests/storefront/application/",
    "api": "tests/storefront/integration/",
    "bdd": "tests/storefront/bdd/",
}


def _install(session: nox.Session) -> None:
    session.run("poetry", "install", "--extras", "test", external=True)
    session.run("pip", "install", "--force-reinstall", "--no-cache-dir", *_REBUILD)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the whole storefront suite."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def suite(session: nox.Session) -> None:
    """Run selected layers, e.g. ``nox -s suite -- domain bdd``."""
    unknown = [name for name in session.posargs if name not in _LAYERS]
    if unknown:
        session.error(f"Unknown layer(s): {', '.join(unknown)}; choose from {', '.join(_LAYERS)}")

    _install(session)
    session.run("pytest", *[_LAYERS[name] for name in session.posargs or _LAYERS])


@nox.session(python=PYTHON_VERSIONS[-1])
def production(session: nox.Session) -> None:
    """Run the suite against the `production` overlay (needs DATABASE_URL)."""
    _install(session)
    session.run("pytest", "--env", "production", *session.posargs)
