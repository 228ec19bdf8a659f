# PATH: apps/domains/submissions/locks.py
"""
Submission 단위 배타 구간

- 상태를 바꾸는 모든 연산(record_answer / submit / grade / complete_if_fully_graded / complete)은
  이 구간 안에서만 Submission / SubmissionAnswer 를 수정한다.
- 구간 = transaction.atomic + Submission row lock(select_for_update).
  예외로 빠져나가도 rollback 과 함께 lock 이 풀린다.
- 다른 submission 과는 독립 (전역 lock 없음).
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from django.conf import settings
from django.db import OperationalError, transaction

from apps.domains.submissions.exceptions import NotFound, SubmissionBusy
from apps.domains.submissions.models import Submission

logger = logging.getLogger(__name__)


@contextmanager
def submission_lock(submission_id: int) -> Iterator[Submission]:
    nowait = bool(getattr(settings, "SUBMISSION_LOCK_NOWAIT", False))

    with transaction.atomic():
        try:
            submission = (
                Submission.objects
                .select_for_update(nowait=nowait)
                .filter(id=int(submission_id))
                .first()
            )
        except OperationalError as e:
            if not nowait:
                raise
            logger.info("SUBMISSION_LOCK busy submission_id=%s", submission_id)
            raise SubmissionBusy() from e

        if submission is None:
            raise NotFound(f"Submission {submission_id} not found.")

        yield submission
