import pytest

from apps.domains.results.models import TestResult
from apps.domains.results.services.applier import ResultAggregator
from apps.domains.submissions.exceptions import NotFound
from apps.domains.submissions.models import SubmissionAnswer
from apps.domains.submissions.services.submission_service import SubmissionService

pytestmark = pytest.mark.django_db


@pytest.fixture
def completed_mixed(student, mixed_set):
    test_set, mcq, essay = mixed_set
    service = SubmissionService()
    submission = service.start(user=student, set_id=test_set.id)
    service.record_answer(submission_id=submission.id, question_id=mcq.id, answer_data="A")
    service.submit(submission_id=submission.id)
    SubmissionAnswer.objects.filter(submission=submission, question_id=essay.id).update(manual_score=2.5)
    service.complete_if_fully_graded(submission_id=submission.id)
    submission.refresh_from_db()
    return submission


class TestResultAggregator:
    def test_sums_manual_then_auto_scores(self, completed_mixed):
        assert completed_mixed.total_score == 3.5

    def test_aggregate_is_idempotent(self, completed_mixed):
        first = ResultAggregator.aggregate(completed_mixed.id)
        second = ResultAggregator.aggregate(completed_mixed.id)

        assert first == second == 3.5
        assert TestResult.objects.filter(submission=completed_mixed).count() == 1

    def test_missing_scores_count_as_zero(self, student, mixed_set):
        test_set, _, _ = mixed_set
        service = SubmissionService()
        submission = service.start(user=student, set_id=test_set.id)
        service.submit(submission_id=submission.id)

        assert ResultAggregator.aggregate(submission.id) == 0.0

    def test_result_record_fields(self, completed_mixed):
        result = TestResult.objects.get(submission=completed_mixed)

        assert result.user_id == completed_mixed.user_id
        assert result.set_id == completed_mixed.set_id
        assert result.score == 3.5
        assert result.max_score == 6.0
        assert result.total_questions == 2
        assert result.correct_answers == 1
        assert result.time_spent_sec == completed_mixed.duration_sec

    def test_unknown_submission(self):
        with pytest.raises(NotFound):
            ResultAggregator.aggregate(31337)
