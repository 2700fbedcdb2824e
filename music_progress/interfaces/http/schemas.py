from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ...domain.entities import Account, Lesson, ProgressEntry, Role

class RegisterReq(BaseModel):
    name: str
    email: str
    password: str

class LoginReq(BaseModel):
    email: str
    password: str

class AccountOut(BaseModel):
    id: int
    name: str
    email: str
    role: Role

class TokenResp(BaseModel):
    token: str
    token_type: str = "bearer"

class LessonCreate(BaseModel):
    title: str
    description: str

class LessonOut(BaseModel):
    id: int
    title: str
    description: str

class ProgressCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: int = Field(alias="studentId")
    lesson_id: int = Field(alias="lessonId")

class ProgressOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: int = Field(alias="studentId")
    lesson_id: int = Field(alias="lessonId")
    completed_at: datetime = Field(alias="completedAt")


# пароль наружу не отдаём
def account_out(a: Account) -> AccountOut:
    return AccountOut(id=a.id, name=a.name, email=a.email, role=a.role)

def lesson_out(lesson: Lesson) -> LessonOut:
    return LessonOut(id=lesson.id, title=lesson.title, description=lesson.description)

def progress_out(e: ProgressEntry) -> ProgressOut:
    return ProgressOut(student_id=e.student_id, lesson_id=e.lesson_id, completed_at=e.completed_at)
