from __future__ import annotations

import arequest


def test_version() -> None:
    assert isinstance(arequest.__version__, str)


def test_all_exports_exist() -> None:
    for name in arequest.__all__:
        assert hasattr(arequest, name), name
