"""
Word-frequency extractor for the crowdsourcing word cloud.

Turns the free-text ideas submitted for a district into a short, ranked list of
terms. Curated keyword groups are matched first so that related phrasings
("ปลูกต้นไม้", "ปลูกไผ่") count towards one display term; remaining words are
tokenized, filtered and counted on their own.
"""
import logging
import re
from typing import Iterable, Optional, Sequence

from citizenair.config.settings import settings
from citizenair.core.vocabulary import WordCloudVocabulary, get_vocabulary
from citizenair.models.dtos import Submission, WordWeight

logger = logging.getLogger(__name__)


class WordFrequencyExtractor:
    """
    Ranks the terms used across a collection of idea texts.

    The extractor holds no mutable state, so one instance can serve concurrent
    requests. The vocabulary it is given is only ever read.
    """

    def __init__(
        self,
        vocabulary: Optional[WordCloudVocabulary] = None,
        max_terms: int = settings.WORDCLOUD_MAX_TERMS,
        weight_multiplier: int = settings.WORDCLOUD_WEIGHT_MULTIPLIER,
        min_weight: int = settings.WORDCLOUD_MIN_WEIGHT,
        min_token_length: int = settings.WORDCLOUD_MIN_TOKEN_LENGTH,
        max_token_length: int = settings.WORDCLOUD_MAX_TOKEN_LENGTH,
        dedupe_variant_matches: bool = settings.WORDCLOUD_DEDUPE_VARIANT_MATCHES,
    ):
        """
        Initializes the extractor.

        Args:
            vocabulary: Keyword groups, stopwords and target script. Defaults to the
                        process-wide vocabulary from settings.
            max_terms: Maximum number of entries returned.
            weight_multiplier: Display weight per occurrence.
            min_weight: Lower bound of the display weight.
            min_token_length: Shortest free token (after lowercasing) that is counted.
            max_token_length: Longest free token (after lowercasing) that is counted.
            dedupe_variant_matches: When True a keyword group is counted at most once
                                    per text, otherwise once per matching variant.
        """
        self.vocabulary = vocabulary if vocabulary is not None else get_vocabulary(settings.WORDCLOUD_VOCABULARY_PATH)
        self.max_terms = max(max_terms, 0)
        self.weight_multiplier = weight_multiplier
        self.min_weight = min_weight
        self.min_token_length = min_token_length
        self.max_token_length = max_token_length
        self.dedupe_variant_matches = dedupe_variant_matches

        # Lowercased once here instead of for every text
        self._folded_groups: tuple[tuple[str, tuple[str, ...]], ...] = tuple(
            (group.term, tuple(variant.lower() for variant in group.variants))
            for group in self.vocabulary.keyword_groups
        )
        self._folded_variants: tuple[str, ...] = tuple(variant.lower() for variant in self.vocabulary.variants)
        self._non_word_pattern = re.compile(rf"[^{self.vocabulary.script_range}a-zA-Z0-9\s]")
        self._script_pattern = re.compile(rf"[{self.vocabulary.script_range}]")

    def _count_keyword_groups(self, folded_text: str, counts: dict[str, int]) -> None:
        for term, variants in self._folded_groups:
            matches = sum(1 for variant in variants if variant in folded_text)
            if not matches:
                continue
            if self.dedupe_variant_matches:
                matches = 1
            counts[term] = counts.get(term, 0) + matches

    def tokenize(self, text: str) -> list[str]:
        """
        Splits a text into lowercased candidate tokens.

        Punctuation and symbols outside the target script and ASCII letters/digits
        are treated as separators. Tokens that are too short or too long, that are
        stopwords, or that contain no character of the target script are dropped.

        Args:
            text (str): The raw idea text.

        Returns:
            list[str]: Surviving tokens in order of appearance, duplicates kept.
        """
        tokens = []
        for word in self._non_word_pattern.sub(" ", text).split():
            clean = word.lower().strip()
            if not (self.min_token_length <= len(clean) <= self.max_token_length):
                continue
            if clean in self.vocabulary.stopwords:
                continue
            if not self._script_pattern.search(clean):
                continue
            tokens.append(clean)
        return tokens

    def is_covered_by_keywords(self, token: str) -> bool:
        """True when ``token`` overlaps a keyword variant in either direction."""
        return any(token in variant or variant in token for variant in self._folded_variants)

    def count_terms(self, texts: Iterable[Optional[str]]) -> dict[str, int]:
        """
        Counts keyword-group terms and free tokens over all texts.

        Args:
            texts: Idea texts. ``None`` is treated as an empty text and other
                   non-string values are converted with ``str``.

        Returns:
            dict[str, int]: Term -> raw count, in first-seen order.
        """
        counts: dict[str, int] = {}
        for text in texts:
            if text is None:
                continue
            if not isinstance(text, str):
                text = str(text)
            if not text:
                continue

            self._count_keyword_groups(text.lower(), counts)

            for token in self.tokenize(text):
                if self.is_covered_by_keywords(token):
                    continue
                counts[token] = counts.get(token, 0) + 1
        return counts

    def rank(self, counts: dict[str, int]) -> list[WordWeight]:
        """
        Orders counted terms and converts counts into display weights.

        Ties keep the order in which the terms were first counted.
        """
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[: self.max_terms]
        return [
            WordWeight(term=term, weight=max(count * self.weight_multiplier, self.min_weight))
            for term, count in ranked
        ]

    def extract(self, texts: Iterable[Optional[str]]) -> list[WordWeight]:
        """
        Builds the word cloud for a collection of idea texts.

        Args:
            texts: Idea texts, typically all approved ideas of one district.

        Returns:
            list[WordWeight]: At most ``max_terms`` entries, highest weight first.
                              Empty when nothing countable was found.
        """
        counts = self.count_terms(texts)
        word_cloud = self.rank(counts)
        logger.debug("Extracted %d terms (%d distinct counted)", len(word_cloud), len(counts))
        return word_cloud

    def extract_from_submissions(self, submissions: Sequence[Submission]) -> list[WordWeight]:
        """Same as :meth:`extract` for submission records."""
        return self.extract(submission.text for submission in submissions)
