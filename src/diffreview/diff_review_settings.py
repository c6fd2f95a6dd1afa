from dataclasses import dataclass
import json


@dataclass
class DiffReviewSettings:
    """
    Settings for diff review.

    This class handles the loading and saving of settings to a JSON file.
    """
    merge_gap_threshold: int = 2  # Unchanged lines allowed between merged hunks
    default_summary: str = "Changes applied"

    def __post_init__(self) -> None:
        if isinstance(self.merge_gap_threshold, bool) or not isinstance(self.merge_gap_threshold, int):
            raise ValueError(f"mergeGapThreshold must be an integer, got {self.merge_gap_threshold!r}")

        if self.merge_gap_threshold < 0:
            raise ValueError(f"mergeGapThreshold must not be negative, got {self.merge_gap_threshold}")

    @classmethod
    def load(cls, path: str) -> "DiffReviewSettings":
        """Load settings from a JSON file."""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
            diff_review = data.get("diffReview", {})

            return cls(
                merge_gap_threshold=diff_review.get("mergeGapThreshold", 2),
                default_summary=diff_review.get("defaultSummary", "Changes applied")
            )

    def save(self, path: str) -> None:
        """Save settings to a JSON file."""
        data = {
            "diffReview": {
                "mergeGapThreshold": self.merge_gap_threshold,
                "defaultSummary": self.default_summary,
            },
        }
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
