from fastapi import APIRouter
from .student_bot_routers import router as student_bot

router = APIRouter(prefix="/api")
router.include_router(student_bot, prefix="/student_bot", tags=["student_bot"])
