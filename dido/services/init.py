"""Service: analyse the current project once and remember what it is."""

from __future__ import annotations

from datetime import datetime, timezone

from ..config.settings import Settings
from ..core.constants import README_CONTEXT_CHARS, README_NAME
from ..core.context_store import ProjectContextStore
from ..core.git_client import GitClient
from ..core.llm_client import CommitMessageGenerator
from ..core.types import ProjectContext
from .commit import CommitError, GeneratorFactory, GitFactory


def init_project(
    settings: Settings,
    repo_dir: str,
    *,
    store: ProjectContextStore,
    git_factory: GitFactory = GitClient,
    generator_factory: GeneratorFactory = CommitMessageGenerator,
) -> ProjectContext | None:
    git = git_factory(repo_dir)
    if not git.is_git_repository():
        raise CommitError("Not a git repository")

    repo_path = git.repository_root()
    readme = git.read_file(README_NAME)

    print("Initializing dido for this project...")

    if not settings.api_key:
        raise CommitError(
            "Anthropic API key not configured.\n"
            "Set it via: dido config --api-key YOUR_API_KEY\n"
            "Or set ANTHROPIC_API_KEY environment variable"
        )

    if not readme:
        print("No README found, basic initialization completed.")
        return None

    generator = generator_factory(settings.api_key, settings.model)
    print("Analyzing project...")
    project_type = generator.analyze_project_type(readme, git.status())
    context = ProjectContext(
        project_path=repo_path,
        project_type=project_type,
        last_analyzed=datetime.now(timezone.utc).isoformat(),
        readme_content=readme[:README_CONTEXT_CHARS],
    )
    store.save(context)
    print(f"Project initialized as: {project_type}")
    return context
