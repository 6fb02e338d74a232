"""Data carried through the fetch → compose → generate pipeline.

None of these are persisted directly. The store package keeps its own
records (CachedPost, PreferencesRecord) and the CLI maps between the two.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Optional, Union

Tone = Literal["casual", "professional", "technical"]
VocabularyLevel = Literal["simple", "intermediate", "advanced"]
StructurePreference = Literal["narrative", "structured", "tutorial"]
CodeExampleStyle = Literal["minimal", "detailed", "annotated"]
PreferredLength = Literal["short", "medium", "long"]
FetchStage = Literal["pr_details", "commits", "files", "generating", "complete"]


@dataclass
class PRInfo:
    owner: str
    repo: str
    pull_number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class Commit:
    message: str
    sha: str
    url: str


@dataclass
class FileChange:
    filename: str
    status: str  # added | modified | removed | renamed | copied | changed | unchanged
    additions: int
    deletions: int
    changes: int
    patch: Optional[str] = None  # None for binary files or very large diffs


@dataclass
class Author:
    login: str = ""
    avatar_url: str = ""


@dataclass
class DiscussionComment:
    body: str
    user: str
    created_at: str


@dataclass
class PRReview:
    body: str
    state: str
    user: str
    submitted_at: str


@dataclass
class PRStats:
    """Untruncated totals, so the prompt can mention size even when lists are capped."""

    total_commits: int = 0
    total_files: int = 0
    additions: int = 0
    deletions: int = 0
    total_comments: int = 0
    total_reviews: int = 0


@dataclass
class PullRequestData:
    title: str
    description: str
    commits: list[Commit] = field(default_factory=list)
    files: list[FileChange] = field(default_factory=list)
    author: Author = field(default_factory=Author)
    created_at: str = ""
    updated_at: str = ""
    stats: Optional[PRStats] = None
    comments: list[DiscussionComment] = field(default_factory=list)
    reviews: list[PRReview] = field(default_factory=list)


@dataclass
class FetchProgress:
    stage: FetchStage
    progress: int  # 0-100, never decreases within one fetch
    message: str


ProgressCallback = Callable[[FetchProgress], None]


@dataclass
class WritingStyle:
    tone: Tone = "professional"
    avg_sentence_length: float = 20
    vocabulary_level: VocabularyLevel = "intermediate"
    structure_preference: StructurePreference = "structured"
    code_example_style: CodeExampleStyle = "detailed"


@dataclass
class UserPreferences:
    user_id: str
    writing_samples: list[str] = field(default_factory=list)
    preferred_tone: Tone = "professional"
    preferred_length: PreferredLength = "medium"
    custom_instructions: Optional[str] = None


@dataclass
class RegenerationPreset:
    name: str
    description: str = ""
    system_prompt_modifier: str = ""
    user_prompt_modifier: str = ""
    temperature: float = 0.7
    is_default: bool = False


# RegenerationOptions is a closed set of three variants. Every variant may
# carry an explicit temperature, which wins over anything the variant implies.


@dataclass
class PresetOption:
    preset: RegenerationPreset
    temperature: Optional[float] = None


@dataclass
class CustomOption:
    prompt: str
    temperature: Optional[float] = None


@dataclass
class UserStyleOption:
    temperature: Optional[float] = None


RegenerationOptions = Union[PresetOption, CustomOption, UserStyleOption]
