"""
채점 엔진 도메인 오류 : 순수 파이썬 (Django/DRF 미사용)

모두 사용자에게 그대로 노출되는 검증 실패이며 프로세스 치명 오류가 아니다.
HTTP 변환은 apps.api.common.exceptions.api_exception_handler 가 담당.
"""
from __future__ import annotations


class GradingError(Exception):
    """
    code:
      - duplicate_attempt
      - submission_closed
      - not_found
      - invalid_question_type
      - out_of_range
      - malformed_answer
      - submission_busy
    """

    code = "grading_error"
    http_status = 400
    default_message = "Grading operation failed."

    def __init__(self, message: str | None = None):
        self.message = str(message or self.default_message)
        super().__init__(self.message)


class DuplicateAttempt(GradingError):
    """같은 (user, set) 에 in_progress 응시가 이미 있음."""
    code = "duplicate_attempt"
    http_status = 409
    default_message = "An attempt for this test set is already in progress."


class SubmissionClosed(GradingError):
    """현재 상태에서 허용되지 않는 변경."""
    code = "submission_closed"
    http_status = 409
    default_message = "Submission is closed for this operation."


class NotFound(GradingError):
    code = "not_found"
    http_status = 404
    default_message = "Not found."


class InvalidQuestionType(GradingError):
    """객관식에 수동 채점, 주관식에 자동 채점 등."""
    code = "invalid_question_type"
    http_status = 400
    default_message = "Operation is not valid for this question type."


class OutOfRange(GradingError):
    """수동 점수가 [0, points] 범위를 벗어남."""
    code = "out_of_range"
    http_status = 400
    default_message = "Score is out of range."


class MalformedAnswer(GradingError):
    """answer_data 형태가 문항 유형과 맞지 않음 (submit 에서는 0점 처리)."""
    code = "malformed_answer"
    http_status = 400
    default_message = "Answer data has the wrong shape for this question type."


class SubmissionBusy(GradingError):
    """SUBMISSION_LOCK_NOWAIT=True 에서 row lock 경합."""
    code = "submission_busy"
    http_status = 409
    default_message = "Submission is being modified by another request."
