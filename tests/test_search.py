"""Tests for relevance search."""

from app.services.search import rank, relevance_score, search
from tests.helpers import make_platform


class TestEmptyQuery:
    """Blank queries leave the directory untouched."""

    def test_empty_query_returns_input_order(self) -> None:
        platforms = [make_platform("B"), make_platform("A"), make_platform("C")]
        assert search("", platforms) == platforms

    def test_whitespace_query_returns_input_order(self) -> None:
        platforms = [make_platform("B"), make_platform("A")]
        assert search("   \t ", platforms) == platforms

    def test_blank_query_scores_zero(self) -> None:
        assert relevance_score(make_platform("Anything"), "  ") == 0


class TestScoring:
    """Additive scoring rules."""

    def test_name_and_description_matches(self) -> None:
        p = make_platform("Writer Studio", description="A studio for writers")
        # name +10, description +5
        assert relevance_score(p, "studio") == 15

    def test_rules_accumulate_on_one_platform(self) -> None:
        p = make_platform(
            "ChatBot Pro",
            description="A chat assistant",
            tags=["Chat", "NLP"],
            features=["Group chat"],
        )
        # name 10 + description 5 + tag (8 + 3) + feature (6 + 2) + language boost 7
        assert relevance_score(p, "chat") == 41

    def test_case_insensitive(self) -> None:
        p = make_platform(
            "ChatBot Pro",
            description="A chat assistant",
            tags=["Chat", "NLP"],
            features=["Group chat"],
        )
        assert relevance_score(p, "CHAT") == relevance_score(p, "chat") == 41

    def test_short_words_do_not_score(self) -> None:
        p = make_platform("Helper", tags=["AI Tools"], features=["ML pipelines"])
        assert relevance_score(p, "ai ml") == 0

    def test_word_matches_count_per_tag_and_word(self) -> None:
        p = make_platform("Zeta", tags=["Video Editing", "Video Generation"])
        # "video" hits both tags, "editing" hits one
        assert relevance_score(p, "video editing") == 3 + 3 + 3 + 8

    def test_free_and_api_boosts(self) -> None:
        p = make_platform("Zeta", has_free=True, api=True)
        assert relevance_score(p, "free") == 7
        assert relevance_score(p, "api") == 7
        assert relevance_score(make_platform("Zeta"), "free api") == 0

    def test_image_boost_needs_image_tag(self) -> None:
        tagged = make_platform("Zeta", tags=["Image Editing"])
        untagged = make_platform("Zeta", tags=["Audio"])
        # "photo" is not in the tag text, only the boost applies
        assert relevance_score(tagged, "photo") == 7
        assert relevance_score(untagged, "photo") == 0

    def test_enterprise_tag_is_matched_exactly(self) -> None:
        assert relevance_score(make_platform("Zeta", tags=["Enterprise"]), "business") == 6
        assert relevance_score(make_platform("Zeta", tags=["enterprise"]), "business") == 0

    def test_developer_boost(self) -> None:
        p = make_platform("Zeta", tags=["Open Source"])
        assert relevance_score(p, "coding") == 6

    def test_generation_scenario(self) -> None:
        p = make_platform("PixelForge", tags=["Image Generation", "API"], has_free=True, api=True)
        other = make_platform("Ledger", tags=["Finance"])

        score = relevance_score(p, "free api image generation")
        # "image generation" tag: 3 + 3, "API" tag: 3, boosts: free 7, api 7, image 7
        assert score == 30
        assert score >= 20
        assert search("free api image generation", [other, p]) == [p]


class TestRanking:
    """Ordering and filtering of results."""

    def test_zero_scores_are_excluded(self) -> None:
        hit = make_platform("Image Lab")
        miss = make_platform("Ledger")
        result = search("image lab", [miss, hit])
        assert result == [hit]
        assert miss not in result

    def test_sorted_by_descending_score(self) -> None:
        low = make_platform("Alpha", description="great for images")
        high = make_platform("Images Hub", tags=["Image Generation"])
        assert search("images", [low, high]) == [high, low]

    def test_ties_keep_input_order(self) -> None:
        first = make_platform("Notes One", description="notes")
        second = make_platform("Notes Two", description="notes")
        assert search("notes", [first, second]) == [first, second]
        assert search("notes", [second, first]) == [second, first]

    def test_every_result_has_positive_score(self) -> None:
        platforms = [
            make_platform("Image Lab", tags=["Image Generation"]),
            make_platform("Ledger"),
            make_platform("Codey", tags=["API"], api=True),
        ]
        for p in search("image api", platforms):
            assert relevance_score(p, "image api") > 0

    def test_deterministic(self) -> None:
        platforms = [
            make_platform("Image Lab", tags=["Image Generation"]),
            make_platform("Codey", tags=["API"], api=True),
            make_platform("Chatter", tags=["NLP"]),
        ]
        assert search("image api chat", platforms) == search("image api chat", platforms)

    def test_rank_exposes_scores(self) -> None:
        p = make_platform("Zeta", has_free=True)
        assert rank("free", [p]) == [(p, 7)]
