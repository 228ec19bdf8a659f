# PATH: apps/api/common/exceptions.py
"""
DRF EXCEPTION_HANDLER

도메인 오류(GradingError)는 code / http_status 를 들고 다닌다.
뷰는 서비스 예외를 잡지 않고 그대로 올려보내며, 여기서 한 번에 응답으로 변환한다.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.domains.submissions.exceptions import GradingError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    if isinstance(exc, GradingError):
        view = context.get("view")
        logger.info(
            "grading error code=%s view=%s detail=%s",
            exc.code,
            type(view).__name__ if view is not None else "-",
            exc.message,
        )
        return Response(
            {"detail": exc.message, "code": exc.code},
            status=exc.http_status or status.HTTP_400_BAD_REQUEST,
        )

    return drf_exception_handler(exc, context)
