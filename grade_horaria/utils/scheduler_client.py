from __future__ import annotations
from typing import Any, Mapping, Optional

import logging

import requests

from grade_horaria.config import settings
from grade_horaria.errors import (
    SchedulerError, SchedulerRejectedError, SchedulerTimeoutError, SchedulerUnavailableError,
)

logger = logging.getLogger("grade_horaria.scheduler")

REJECTED_MESSAGE = "Falha ao gerar horário. Por favor, verifique seus dados e tente novamente."
UNAVAILABLE_MESSAGE = "Erro de conexão. Tente novamente."
TIMEOUT_MESSAGE = "O serviço de geração de horários demorou demais para responder. Tente novamente."
UNEXPECTED_MESSAGE = "Ocorreu um erro inesperado ao gerar o horário."


def generate_timetable(
    curriculum: Mapping[str, Any],
    session: Optional[requests.Session] = None,
) -> Any:
    """
    POST the curriculum to {SCHEDULER_BACKEND_URL}/generate-timetable and
    return the decoded JSON answer as-is (it may still be wrapped under
    "timetable"). No retries.
    """
    url = settings.SCHEDULER_BACKEND_URL.rstrip("/") + "/generate-timetable"
    http = session or requests

    try:
        resp = http.post(url, json=curriculum, timeout=settings.SCHEDULER_TIMEOUT_SECONDS)
    except requests.Timeout as e:
        logger.warning("Scheduler timeout after %ss: %s", settings.SCHEDULER_TIMEOUT_SECONDS, url)
        raise SchedulerTimeoutError(TIMEOUT_MESSAGE) from e
    except requests.ConnectionError as e:
        logger.warning("Scheduler unreachable: %s (%s)", url, e)
        raise SchedulerUnavailableError(UNAVAILABLE_MESSAGE) from e
    except requests.RequestException as e:
        logger.error("Scheduler request failed: %s (%s)", url, e)
        raise SchedulerError(UNEXPECTED_MESSAGE, 500) from e

    if not resp.ok:
        logger.error("Python backend error %s: %s", resp.status_code, resp.text[:2000])
        raise SchedulerRejectedError(REJECTED_MESSAGE, status_code=resp.status_code, body=resp.text)

    try:
        data = resp.json()
    except ValueError as e:
        logger.error("Scheduler answered with invalid JSON: %s", resp.text[:2000])
        raise SchedulerRejectedError(REJECTED_MESSAGE, status_code=502, body=resp.text) from e

    logger.info("Timetable generated by %s", url)
    return data
