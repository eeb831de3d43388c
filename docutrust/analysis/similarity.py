# docutrust/analysis/similarity.py

from typing import List, Tuple

from docutrust.scoring.utils import round_half_up


def jaccard_similarity(a: str, b: str) -> float:
    """
    Token-set Jaccard similarity, tokenizing on whitespace (case-sensitive).

    An empty union (both texts blank) is defined as 0.0.
    """
    tokens_a = set(a.split())
    tokens_b = set(b.split())
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)


class CorpusHistory:
    """
    Append-only history of every description submitted so far, kept as
    submitted (not redacted) for near-duplicate scoring.

    Comparison is against every prior entry, O(n) per submission. Nothing
    is ever pruned here; bounding memory is the owner's decision.
    """

    def __init__(self):
        self._entries: List[str] = []

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def score(self, text: str) -> int:
        """
        Plagiarism score in [0, 100] of text against history, without
        recording it. The first submission always scores 0.
        """
        best = 0.0
        for prior in self._entries:
            best = max(best, jaccard_similarity(text, prior))
        return round_half_up(best * 100)

    def record(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"Expected text as str, got {type(text).__name__}")
        self._entries.append(text)

    def record_and_score(self, text: str) -> int:
        score = self.score(text)
        self.record(text)
        return score
