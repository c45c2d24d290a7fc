import pytest

from import_redirector.components.redirector import RuleRegistry, RuleRegistryBuilder


@pytest.fixture
def registry() -> RuleRegistry:
    """
    Registry with one wildcard domain and one plain module path,
    mirroring the sample rules.yaml.
    """
    builder = RuleRegistryBuilder()
    builder.register("rsc.io/*", "https://github.com/rsc/*")
    builder.register("9fans.net/go", "https://github.com/9fans/go")
    return builder.finalize(vcs="git")


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(
        "vcs: git\n"
        "modules:\n"
        "  - import_path: rsc.io/*\n"
        "    repo_path: https://github.com/rsc/*\n"
        "  - import_path: 9fans.net/go\n"
        "    repo_path: https://github.com/9fans/go\n"
    )
    return path
