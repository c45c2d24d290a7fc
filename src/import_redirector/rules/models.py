from pydantic import BaseModel, ConfigDict, Field


class ModuleRule(BaseModel):
    import_path: str = Field(min_length=1)
    repo_path: str = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")


class RedirectorRules(BaseModel):
    vcs: str | None = None
    doc_base_url: str | None = None
    modules: list[ModuleRule] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def iter_pairs(self) -> list[tuple[str, str]]:
        """Configured (import_path, repo_path) pairs in file order."""
        return [(m.import_path, m.repo_path) for m in self.modules]
