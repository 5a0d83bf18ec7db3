from subprocess import run

from pathlib import Path

import lss


def test_with_mypy() -> None:
    paths = [
        str(Path(lss.__file__).parent),  # lss dir
        str(Path(__file__).parent),  # tests dir
    ]

    run(["mypy"] + paths, check=True)
