"""
Error types for the caption pipeline.

Every failure carries a stable ``code`` so the CLI and logs can report which
stage broke. All of them are terminal for the current invocation.
"""
from __future__ import annotations


class SkillIssueError(RuntimeError):
    """Base error with a stable error code."""

    code = "skill_issue.error"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class NoAssetsFound(SkillIssueError):
    code = "skill_issue.assets.none_found"

    def __init__(self, filter_text: str = "") -> None:
        if filter_text:
            message = f"no gifs match filter '{filter_text}'"
        else:
            message = "no gifs available"
        super().__init__(message)
        self.filter_text = filter_text


class AssetCatalogError(SkillIssueError):
    code = "skill_issue.assets.catalog"


class TempDirCreateFailed(SkillIssueError):
    code = "skill_issue.render.tempdir"


class SubtitleWriteFailed(SkillIssueError):
    code = "skill_issue.render.subtitle"


class AssetExtractFailed(SkillIssueError):
    code = "skill_issue.render.extract"


class AssetWriteFailed(SkillIssueError):
    code = "skill_issue.render.asset_write"


class EncodeStepFailed(SkillIssueError):
    """An encoder subprocess exited non-zero or could not be spawned."""

    code = "skill_issue.render.encode"

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"{stage} failed: {message}")
        self.stage = stage


class PathResolutionFailed(SkillIssueError):
    code = "skill_issue.output.path"


class CleanupFailed(SkillIssueError):
    code = "skill_issue.render.cleanup"


__all__ = [
    "SkillIssueError",
    "NoAssetsFound",
    "AssetCatalogError",
    "TempDirCreateFailed",
    "SubtitleWriteFailed",
    "AssetExtractFailed",
    "AssetWriteFailed",
    "EncodeStepFailed",
    "PathResolutionFailed",
    "CleanupFailed",
]
