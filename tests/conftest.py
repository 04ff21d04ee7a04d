import os
import stat
import sys
import textwrap
from pathlib import Path

import pytest
from attrs import define

from mvnverify.config import VerifierSettings

pytest_plugins = ["pytester"]

# Records "<cwd>|<args>" per call and fails every goal listed in FAKE_MVN_FAIL.
FAKE_MVN_SCRIPT = """\
#!/bin/sh
for goal; do :; done
echo "$(pwd)|$*" >> "$FAKE_MVN_CALLS"
echo "[INFO] Scanning for projects..."
echo "[INFO] Running goal $goal"
case " $FAKE_MVN_FAIL " in
  *" $goal "*)
    echo "[ERROR] Failed to execute goal $goal"
    exit 1
    ;;
esac
mkdir -p target
touch "target/$goal.done"
echo "[INFO] BUILD SUCCESS"
"""


@define
class FakeMaven:
    path: Path
    calls_file: Path

    def calls(self) -> list[tuple[str, list[str]]]:
        if not self.calls_file.exists():
            return []
        result = []
        for line in self.calls_file.read_text().splitlines():
            cwd, _, args = line.partition("|")
            result.append((cwd, args.split()))
        return result

    def goals(self) -> list[str]:
        return [args[-1] for _, args in self.calls()]


@pytest.fixture
def fake_mvn(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeMaven:
    """A stand-in `mvn` executable that logs every invocation."""
    if sys.platform == "win32":
        pytest.skip("The fake Maven executable is a POSIX shell script")

    bin_dir = tmp_path / "fake-bin"
    bin_dir.mkdir()
    script = bin_dir / "mvn"
    script.write_text(FAKE_MVN_SCRIPT)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    calls_file = tmp_path / "mvn-calls.txt"
    monkeypatch.setenv("FAKE_MVN_CALLS", str(calls_file))
    monkeypatch.setenv("FAKE_MVN_FAIL", "")
    return FakeMaven(path=script, calls_file=calls_file)


@pytest.fixture
def resources_dir(tmp_path: Path) -> Path:
    """A resource tree holding one sample project and one settings file."""
    root = tmp_path / "resources"
    project = root / "projects" / "simple"
    (project / "src" / "main" / "java").mkdir(parents=True)
    (project / "pom.xml").write_text(
        textwrap.dedent(
            """\
            <project>
              <modelVersion>4.0.0</modelVersion>
              <groupId>org.example</groupId>
              <artifactId>simple</artifactId>
              <version>1.0</version>
            </project>
            """
        )
    )
    (root / "settings").mkdir()
    (root / "settings" / "mirror.xml").write_text("<settings/>\n")
    return root


@pytest.fixture
def settings(fake_mvn: FakeMaven, resources_dir: Path, tmp_path: Path) -> VerifierSettings:
    return VerifierSettings(
        executable=str(fake_mvn.path),
        resources_root=resources_dir,
        work_dir=tmp_path / "work",
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Removes MVNVERIFY_* variables inherited from the calling shell."""
    for name in list(os.environ):
        if name.startswith("MVNVERIFY_"):
            monkeypatch.delenv(name)
