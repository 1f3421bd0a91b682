from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class EditorialRules(BaseModel):
    intro_labels: list[str] = Field(default_factory=lambda: ["introduction", "intro", "введение"])
    max_intro_paragraphs: int = 3
    teaser_paragraphs: int = 3


class PaywallRules(BaseModel):
    open_ratio: float = 0.2
    default_teaser_blocks: int = 4
    strategy: Literal["primary", "editorial", "divider"] = "primary"
    editorial: EditorialRules = Field(default_factory=EditorialRules)


class LockedStoreRules(BaseModel):
    output_dir: str = "dist"
    path_template: str = "content/locked/{branch}/{slug}.json"
    public_prefix: str = "/"


class UnlockMessages(BaseModel):
    add_label: str = "Add paragraph"
    loading_label: str = "Loading..."
    finished_label: str = "Text finished"
    no_source_label: str = "No source configured"
    no_source_error: str = "No source configured"
    load_failed_error: str = "Failed to load full text"
    end_marker: str = "End of article reached"
    hint: str = "Press the button to reveal the next paragraph"


class UnlockRules(BaseModel):
    cooldown_seconds: int = 15
    timer_segments: int = 8
    messages: UnlockMessages = Field(default_factory=UnlockMessages)


class BranchRule(BaseModel):
    name: str
    label: str = ""


class ContentRules(BaseModel):
    root: str = "content"
    branches: list[BranchRule] = Field(
        default_factory=lambda: [
            BranchRule(name="intro", label="Introduction"),
            BranchRule(name="course", label="Course"),
            BranchRule(name="appendix", label="Appendix"),
            BranchRule(name="recommendations", label="Recommendations"),
        ]
    )
    strip_leading_heading: bool = True
    overrides_path: str = "content/paywall-overrides.json"
    partials_dir: str = "partials"


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class Rules(BaseModel):
    project: ProjectRules
    paywall: PaywallRules = Field(default_factory=PaywallRules)
    locked_store: LockedStoreRules = Field(default_factory=LockedStoreRules)
    unlock: UnlockRules = Field(default_factory=UnlockRules)
    content: ContentRules = Field(default_factory=ContentRules)

    model_config = ConfigDict(extra="forbid")
