import logging

import pytest

from apps.domains.results.services.grader import ScoreResult, score, score_or_zero
from apps.domains.submissions.exceptions import InvalidQuestionType, MalformedAnswer
from src.application.ports.question_catalog import QuestionSnapshot


def _q(type_, correct, points=1, qid=1):
    return QuestionSnapshot(
        id=qid,
        skill="Reading",
        type=type_,
        points=points,
        options=["A", "B", "C", "D"],
        correct_answers=correct,
    )


class TestMcqSingle:
    def test_correct_answer_gets_full_points(self):
        assert score(_q("mcq_single", ["A"], points=3), "A") == ScoreResult(3.0, True)

    def test_wrong_answer_gets_zero(self):
        assert score(_q("mcq_single", ["A"]), "B") == ScoreResult(0.0, False)

    def test_comparison_trims_and_ignores_case(self):
        assert score(_q("mcq_single", ["A"]), "  a ").is_correct is True

    def test_single_element_list_is_accepted(self):
        assert score(_q("mcq_single", ["B"]), ["B"]).is_correct is True

    def test_numeric_option_id(self):
        assert score(_q("mcq_single", ["2"]), 2).is_correct is True

    def test_integral_float_matches_integer_key(self):
        assert score(_q("mcq_single", ["1"]), 1.0).is_correct is True
        assert score(_q("mcq_single", [1]), 1.0).is_correct is True
        assert score(_q("mcq_single", ["1"]), 1.5).is_correct is False

    @pytest.mark.parametrize("empty", [None, "", "   ", []])
    def test_empty_answer_is_zero_not_error(self, empty):
        assert score(_q("mcq_single", ["A"]), empty) == ScoreResult(0.0, False)

    def test_structured_answer_is_malformed(self):
        with pytest.raises(MalformedAnswer):
            score(_q("mcq_single", ["A"]), {"choice": "A"})

    def test_two_choices_is_malformed(self):
        with pytest.raises(MalformedAnswer):
            score(_q("mcq_single", ["A"]), ["A", "B"])

    def test_missing_answer_key_scores_zero_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = score(_q("mcq_single", [], qid=42), "A")

        assert result == ScoreResult(0.0, False)
        assert "answer key missing question_id=42" in caplog.text


class TestMcqMulti:
    def test_exact_set_is_correct(self):
        assert score(_q("mcq_multi", ["A", "C"], points=2), ["A", "C"]) == ScoreResult(2.0, True)

    def test_order_of_answer_and_key_does_not_matter(self):
        assert score(_q("mcq_multi", ["C", "A"]), ["A", "C"]).is_correct is True
        assert score(_q("mcq_multi", ["A", "C"]), ["C", "A"]).is_correct is True

    def test_missing_choice_gets_no_partial_credit(self):
        assert score(_q("mcq_multi", ["A", "C"], points=2), ["A"]) == ScoreResult(0.0, False)

    def test_extra_choice_is_wrong(self):
        assert score(_q("mcq_multi", ["A", "C"]), ["A", "C", "D"]).is_correct is False

    def test_case_insensitive(self):
        assert score(_q("mcq_multi", ["A", "C"]), ["c", "a"]).is_correct is True

    def test_plain_string_is_malformed(self):
        with pytest.raises(MalformedAnswer):
            score(_q("mcq_multi", ["A"]), "A")


class TestFillBlank:
    def test_any_variant_is_accepted(self):
        q = _q("fill_blank", ["cat", "kitty"])
        assert score(q, "cat").is_correct is True
        assert score(q, "kitty").is_correct is True
        assert score(q, "dog").is_correct is False

    def test_numeric_answer_matches_regardless_of_float_form(self):
        q = _q("fill_blank", ["42", "3.5"])
        assert score(q, 42.0).is_correct is True
        assert score(q, 3.5).is_correct is True
        assert score(q, 42.1).is_correct is False

    def test_case_and_surrounding_whitespace_are_ignored(self):
        q = _q("fill_blank", ["cat"], points=2)
        for answer in ("cat", "CAT", "  Cat  ", "\tcAt\n"):
            assert score(q, answer) == ScoreResult(2.0, True)

    def test_multi_blank_all_correct(self):
        q = _q("fill_blank", [["goes"], ["to", "toward"]], points=2)
        assert score(q, ["Goes", " toward "]) == ScoreResult(2.0, True)

    def test_multi_blank_one_wrong_gets_nothing(self):
        q = _q("fill_blank", [["goes"], ["to", "toward"]], points=2)
        assert score(q, ["goes", "from"]) == ScoreResult(0.0, False)

    def test_multi_blank_missing_blank_is_wrong(self):
        q = _q("fill_blank", [["goes"], ["to"]])
        assert score(q, ["goes"]).is_correct is False
        assert score(q, ["goes", ""]).is_correct is False

    def test_nested_answer_is_malformed(self):
        with pytest.raises(MalformedAnswer):
            score(_q("fill_blank", ["cat"]), [["cat"]])


class TestScoreContract:
    @pytest.mark.parametrize("type_", ["writing_prompt", "speaking_prompt"])
    def test_subjective_types_are_rejected(self, type_):
        with pytest.raises(InvalidQuestionType):
            score(_q(type_, []), "an essay")

    def test_score_is_always_within_points(self):
        cases = [
            (_q("mcq_single", ["A"], points=4), ["A", "B", "", None, "z"]),
            (_q("mcq_multi", ["A", "B"], points=4), [["A"], ["A", "B"], [], ["B", "A", "A"]]),
            (_q("fill_blank", ["x"], points=4), ["x", "y", "", None]),
        ]
        for question, answers in cases:
            for answer in answers:
                result = score(question, answer)
                assert 0.0 <= result.auto_score <= question.points

    def test_score_is_deterministic(self):
        q = _q("mcq_multi", ["A", "B"], points=2)
        assert score(q, ["B", "A"]) == score(q, ["B", "A"])

    def test_score_or_zero_swallows_malformed_answer(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = score_or_zero(_q("mcq_multi", ["A"], qid=7), {"bad": True}, submission_id=3)

        assert result == ScoreResult(0.0, False)
        assert "malformed answer submission_id=3 question_id=7" in caplog.text

    def test_score_or_zero_keeps_invalid_question_type(self):
        with pytest.raises(InvalidQuestionType):
            score_or_zero(_q("writing_prompt", []), "text")
