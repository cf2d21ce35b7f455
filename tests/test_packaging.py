from importlib import metadata

import pytest


def _declared_requirements() -> set:
    try:
        requires = metadata.requires("ytmate") or []
    except metadata.PackageNotFoundError:
        pytest.skip("ytmate is not installed")
    names = set()
    for requirement in requires:
        if "extra ==" in requirement:
            continue
        name = requirement.split(";")[0]
        for separator in "[<>=!~ ":
            name = name.split(separator)[0]
        names.add(name.strip().lower())
    return names


@pytest.mark.parametrize(
    "distribution",
    [
        # Imported directly for exception mapping in the Gemini and Firestore providers
        "google-api-core",
        "google-cloud-firestore",
        "google-generativeai",
        "groq",
        "loguru",
    ],
)
def test_directly_imported_distributions_are_declared(distribution):
    assert distribution in _declared_requirements()
