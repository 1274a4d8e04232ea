from fastapi import APIRouter

from grade_horaria.schemas.curriculum import CurriculumIn
from grade_horaria.utils.scheduler_client import generate_timetable

import logging
logger = logging.getLogger("grade_horaria.generate")


router = APIRouter(tags=["Generate"])


@router.post("/generate-timetable")
def generate(body: CurriculumIn):
    """
    把課程資料轉給排課後端，回傳 {success, timetable, inputData}
    Scheduler errors are turned into {"error": ...} by the app handler.
    """
    curriculum = body.model_dump(mode="json", exclude_unset=True)
    logger.info(
        "Generating timetable: %d courses, %d semesters",
        len(body.courses), len(body.semesters),
    )

    timetable = generate_timetable(curriculum)

    return {
        "success": True,
        "timetable": timetable,
        "inputData": curriculum,
    }
