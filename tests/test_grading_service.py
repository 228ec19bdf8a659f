import pytest

from apps.domains.questions.models import Question
from apps.domains.results.models import TestResult
from apps.domains.results.services.grading_service import GradingService, subjective_types_for_skill
from apps.domains.submissions.exceptions import (
    InvalidQuestionType,
    NotFound,
    OutOfRange,
    SubmissionBusy,
    SubmissionClosed,
)
from apps.domains.submissions.models import Submission, SubmissionAnswer
from apps.domains.submissions.services import submission_service as submission_service_module
from apps.domains.submissions.services.submission_service import SubmissionService

pytestmark = pytest.mark.django_db


@pytest.fixture
def grading():
    return GradingService()


@pytest.fixture
def submitted_mixed(student, mixed_set):
    """mcq 정답 + 에세이 제출 완료 (채점 대기)"""
    test_set, mcq, essay = mixed_set
    service = SubmissionService()
    submission = service.start(user=student, set_id=test_set.id)
    service.record_answer(submission_id=submission.id, question_id=mcq.id, answer_data="A")
    service.record_answer(submission_id=submission.id, question_id=essay.id, answer_data="An essay.")
    service.submit(submission_id=submission.id)
    return submission, mcq, essay


class TestSkillFilter:
    def test_mapping_is_case_insensitive(self):
        assert subjective_types_for_skill("Writing") == ("writing_prompt",)
        assert subjective_types_for_skill("SPEAKING") == ("speaking_prompt",)

    def test_no_filter_means_both(self):
        assert set(subjective_types_for_skill(None)) == {"writing_prompt", "speaking_prompt"}
        assert set(subjective_types_for_skill("")) == {"writing_prompt", "speaking_prompt"}

    def test_other_skills_match_nothing(self):
        assert subjective_types_for_skill("Reading") == ()


class TestPendingQueue:
    def test_lists_submissions_with_ungraded_subjective_items(self, grading, submitted_mixed):
        submission, _, _ = submitted_mixed

        rows = grading.list_pending_queue()

        assert [r["submission_id"] for r in rows] == [submission.id]
        row = rows[0]
        assert row["user_id"] == submission.user_id
        assert row["set_id"] == submission.set_id
        assert row["subjective_items"] == 1
        assert row["pending_items"] == 1
        assert row["submit_time"] is not None

    def test_skill_filter(self, grading, submitted_mixed):
        assert len(grading.list_pending_queue(skill="writing")) == 1
        assert grading.list_pending_queue(skill="speaking") == []
        assert grading.list_pending_queue(skill="Listening") == []

    def test_in_progress_and_completed_are_not_listed(self, grading, student, mixed_set, two_mcq_set):
        test_set, _, _ = mixed_set
        SubmissionService().start(user=student, set_id=test_set.id)

        objective_set, _, _ = two_mcq_set
        done = SubmissionService().start(user=student, set_id=objective_set.id)
        SubmissionService().submit(submission_id=done.id)

        assert grading.list_pending_queue() == []

    def test_self_heals_fully_graded_submissions(self, grading, submitted_mixed):
        submission, _, essay = submitted_mixed
        # 완료 판정 없이 점수만 기록된 상태
        SubmissionAnswer.objects.filter(submission=submission, question_id=essay.id).update(manual_score=2)

        assert grading.list_pending_queue() == []

        submission.refresh_from_db()
        assert submission.status == Submission.Status.COMPLETED
        assert submission.total_score == 3.0

    def test_rows_with_ungraded_items_are_not_locked(self, grading, submitted_mixed, other_student, mixed_set, monkeypatch):
        first, _, _ = submitted_mixed
        second = _submit_mixed(other_student, mixed_set)
        _lock_always_busy(monkeypatch)

        rows = grading.list_pending_queue()

        assert {r["submission_id"] for r in rows} == {first.id, second.id}

    def test_busy_row_is_skipped_during_self_heal(self, grading, submitted_mixed, other_student, mixed_set, monkeypatch):
        first, _, essay = submitted_mixed
        second = _submit_mixed(other_student, mixed_set)
        SubmissionAnswer.objects.filter(question_id=essay.id).update(manual_score=2)
        _lock_always_busy(monkeypatch, only_id=first.id)

        assert grading.list_pending_queue() == []

        first.refresh_from_db()
        second.refresh_from_db()
        assert first.status == Submission.Status.SUBMITTED
        assert second.status == Submission.Status.COMPLETED


def _submit_mixed(user, mixed_set):
    test_set, mcq, essay = mixed_set
    service = SubmissionService()
    submission = service.start(user=user, set_id=test_set.id)
    service.record_answer(submission_id=submission.id, question_id=mcq.id, answer_data="A")
    service.record_answer(submission_id=submission.id, question_id=essay.id, answer_data="Another essay.")
    service.submit(submission_id=submission.id)
    return submission


def _lock_always_busy(monkeypatch, only_id=None):
    """NOWAIT lock 경합 재현: only_id 가 없으면 모든 submission 이 busy"""
    real_lock = submission_service_module.submission_lock

    def busy_lock(submission_id):
        if only_id is None or int(submission_id) == only_id:
            raise SubmissionBusy()
        return real_lock(submission_id)

    monkeypatch.setattr(submission_service_module, "submission_lock", busy_lock)


class TestReview:
    def test_items_follow_snapshot_order(self, grading, submitted_mixed):
        submission, mcq, essay = submitted_mixed

        review = grading.get_answers_for_review(submission_id=submission.id)

        assert review["status"] == Submission.Status.SUBMITTED
        assert [i["question_id"] for i in review["items"]] == [mcq.id, essay.id]
        mcq_item, essay_item = review["items"]
        assert mcq_item["correct_answers"] == ["A"]
        assert mcq_item["auto_score"] == 1.0
        assert essay_item["type"] == "writing_prompt"
        assert essay_item["points"] == 5
        assert essay_item["answer_data"] == "An essay."
        assert essay_item["current_score"] is None

    def test_unknown_submission(self, grading):
        with pytest.raises(NotFound):
            grading.get_answers_for_review(submission_id=424242)


class TestGrade:
    def test_grade_records_score_and_completes(self, grading, submitted_mixed, grader):
        submission, _, essay = submitted_mixed

        answer = grading.grade(
            submission_id=submission.id,
            question_id=essay.id,
            manual_score=4,
            comment="Good structure",
            grader=grader,
        )

        assert answer.manual_score == 4.0
        assert answer.comment == "Good structure"
        assert answer.graded_by_id == grader.id
        assert answer.graded_at is not None
        submission.refresh_from_db()
        assert submission.status == Submission.Status.COMPLETED
        assert submission.total_score == 5.0

    def test_objective_question_cannot_be_graded(self, grading, submitted_mixed):
        submission, mcq, _ = submitted_mixed

        with pytest.raises(InvalidQuestionType):
            grading.grade(submission_id=submission.id, question_id=mcq.id, manual_score=1)

    @pytest.mark.parametrize("bad", [-1, 5.5, 6, float("nan"), float("inf"), "abc", None])
    def test_out_of_range_scores(self, grading, submitted_mixed, bad):
        submission, _, essay = submitted_mixed

        with pytest.raises(OutOfRange):
            grading.grade(submission_id=submission.id, question_id=essay.id, manual_score=bad)

        submission.refresh_from_db()
        assert submission.status == Submission.Status.SUBMITTED
        assert submission.answers.get(question_id=essay.id).manual_score is None

    def test_boundary_scores_are_accepted(self, grading, submitted_mixed):
        submission, _, essay = submitted_mixed

        grading.grade(submission_id=submission.id, question_id=essay.id, manual_score=0)
        grading.grade(submission_id=submission.id, question_id=essay.id, manual_score=5)

        submission.refresh_from_db()
        assert submission.total_score == 6.0

    def test_rubric_breakdown_is_stored_with_score(self, grading, submitted_mixed):
        submission, _, essay = submitted_mixed
        breakdown = {"grammar": 2, "structure": 1.5}

        answer = grading.grade(
            submission_id=submission.id,
            question_id=essay.id,
            manual_score=3.5,
            rubric_id=7,
            scores=breakdown,
        )

        answer.refresh_from_db()
        assert answer.rubric_id == "7"
        assert answer.scores == breakdown
        assert answer.manual_score == 3.5

        item = grading.get_answers_for_review(submission_id=submission.id)["items"][1]
        assert item["rubric_id"] == "7"
        assert item["scores"] == breakdown

    def test_grading_in_progress_submission_is_closed(self, grading, student, mixed_set):
        test_set, _, essay = mixed_set
        submission = SubmissionService().start(user=student, set_id=test_set.id)

        with pytest.raises(SubmissionClosed):
            grading.grade(submission_id=submission.id, question_id=essay.id, manual_score=3)

    def test_regrade_after_completion_updates_total(self, grading, submitted_mixed):
        submission, _, essay = submitted_mixed
        grading.grade(submission_id=submission.id, question_id=essay.id, manual_score=4)

        grading.grade(submission_id=submission.id, question_id=essay.id, manual_score=2)

        submission.refresh_from_db()
        assert submission.status == Submission.Status.COMPLETED
        assert submission.total_score == 3.0
        assert TestResult.objects.get(submission=submission).score == 3.0

    def test_partial_grading_keeps_submission_in_queue(self, grading, student, make_question, make_test_set):
        writing = make_question(skill=Question.Skill.WRITING, type=Question.Type.WRITING_PROMPT, points=5, correct_answers=[])
        speaking = make_question(skill=Question.Skill.SPEAKING, type=Question.Type.SPEAKING_PROMPT, points=5, correct_answers=[])
        test_set = make_test_set([writing, speaking])
        service = SubmissionService()
        submission = service.start(user=student, set_id=test_set.id)
        service.submit(submission_id=submission.id)

        grading.grade(submission_id=submission.id, question_id=writing.id, manual_score=3)

        submission.refresh_from_db()
        assert submission.status == Submission.Status.SUBMITTED
        assert grading.list_pending_queue(skill="writing") == []
        assert [r["submission_id"] for r in grading.list_pending_queue(skill="speaking")] == [submission.id]


class TestForceComplete:
    def test_ungraded_subjective_counts_as_zero(self, grading, submitted_mixed):
        submission, _, _ = submitted_mixed

        completed = grading.complete(submission_id=submission.id)

        assert completed.status == Submission.Status.COMPLETED
        assert completed.total_score == 1.0

    def test_only_submitted_can_be_completed(self, grading, submitted_mixed, student, mixed_set):
        submission, _, _ = submitted_mixed
        grading.complete(submission_id=submission.id)

        with pytest.raises(SubmissionClosed):
            grading.complete(submission_id=submission.id)

        test_set, _, _ = mixed_set
        fresh = SubmissionService().start(user=student, set_id=test_set.id)
        with pytest.raises(SubmissionClosed):
            grading.complete(submission_id=fresh.id)
