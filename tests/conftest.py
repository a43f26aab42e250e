import logging
from pathlib import Path

import pytest

from mgen.config import GeneratorConfig
from mgen.generator import target_for_template
from mgen.types import GenerationTarget

from tests.infrastructure import create_greeting_project, write


@pytest.fixture
def tmpproj(tmp_path: Path) -> Path:
    """Greeting project: Program.cs.mustache + Program.cs.json + mgen.yaml (header: none)."""
    return create_greeting_project(tmp_path)


@pytest.fixture
def make_target(tmp_path: Path):
    """Factory: writes a template and its JSON data, returns the GenerationTarget."""
    def _make(name: str, template: str, data_json: str = "{}", cfg: GeneratorConfig = GeneratorConfig()) -> GenerationTarget:
        tpl = write(tmp_path / f"{name}{cfg.template_suffix}", template)
        write(tmp_path / f"{name}.json", data_json)
        return target_for_template(tpl, cfg)
    return _make


@pytest.fixture(autouse=True)
def _isolate_cli_logging(monkeypatch):
    # keep log level predictable for CLI tests
    monkeypatch.delenv("MGEN_DEBUG", raising=False)
    log = logging.getLogger("mgen")
    level = log.level
    yield
    # in-process main() binds a handler to the captured stderr of that test
    for h in [h for h in log.handlers if h.get_name() == "mgen-cli"]:
        log.removeHandler(h)
    log.setLevel(level)
