#
# src/mvnverify/verifier/factory.py
#
"""
Maps the `maven_verifier` setting to the class that runs the build.

`maven` runs the `mvn` found on PATH (or the configured executable);
`maven-wrapper` runs the `mvnw` script shipped inside the extracted project.
"""
import structlog

from mvnverify.exceptions import ConfigurationError
from mvnverify.verifier.maven import MavenVerifier, MavenWrapperVerifier

log = structlog.get_logger("mvnverify.verifier.factory")

VERIFIER_MAP: dict[str, type[MavenVerifier]] = {
    "maven": MavenVerifier,
    "mvn": MavenVerifier,
    "maven-wrapper": MavenWrapperVerifier,
    "mvnw": MavenWrapperVerifier,
}


def get_verifier_class(verifier_name: str) -> type[MavenVerifier]:
    """
    Returns the verifier class for a `--maven-verifier` / `maven_verifier` value.

    Names are case-insensitive, and surrounding whitespace from ini files is ignored.

    Raises:
        ConfigurationError: the name is not a known verifier.
    """
    verifier_class = VERIFIER_MAP.get(verifier_name.strip().lower())
    if verifier_class is None:
        log.error("Unknown Maven verifier", verifier=verifier_name)
        raise ConfigurationError(
            f"Unknown Maven verifier '{verifier_name}'. "
            f"Choose one of: {', '.join(sorted(VERIFIER_MAP))}"
        )

    log.debug("Maven verifier chosen", verifier=verifier_name, cls=verifier_class.__name__)
    return verifier_class

# 🔼⚙️
