from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Float, Time, ForeignKey, JSON
from sqlalchemy.orm import relationship
from .database import Base


class FocusTask(Base):
    __tablename__ = "focus_tasks"

    id = Column(String(36), primary_key=True, index=True)  # UUID string
    name = Column(String, index=True)
    status = Column(String, default="in_progress")  # in_progress, paused, completed, archived
    created_at = Column(DateTime(timezone=True))

    priority_ranking = Column(Integer, nullable=True)

    # Per-task reminder override (seconds)
    reminder_interval_seconds = Column(Float, nullable=True)
    reminder_is_override = Column(Boolean, default=False)

    note_ids = Column(JSON, default=list)  # list of note UUID strings

    time_logs = relationship(
        "TimeLogEntry",
        back_populates="task",
        order_by="TimeLogEntry.position",
        cascade="all, delete-orphan"
    )


class TimeLogEntry(Base):
    __tablename__ = "time_log_entries"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(String(36), ForeignKey("focus_tasks.id"), index=True)
    position = Column(Integer, default=0)  # order inside the task's list
    start_time = Column(DateTime(timezone=True))
    end_time = Column(DateTime(timezone=True), nullable=True)  # NULL = active

    task = relationship("FocusTask", back_populates="time_logs")


class TaskNote(Base):
    __tablename__ = "task_notes"

    id = Column(String(36), primary_key=True, index=True)
    content = Column(Text)
    task_id = Column(String(36), nullable=True, index=True)  # NULL = standalone
    created_at = Column(DateTime(timezone=True))


class WorkSession(Base):
    __tablename__ = "work_sessions"

    id = Column(String(36), primary_key=True, index=True)
    start_time = Column(DateTime(timezone=True), index=True)
    end_time = Column(DateTime(timezone=True), nullable=True)  # NULL = active
    task_ids = Column(JSON, default=list)
    reflection_summary = Column(Text, nullable=True)


class UserPreferences(Base):
    __tablename__ = "user_preferences"

    id = Column(String(36), primary_key=True)
    default_reminder_seconds = Column(Float)
    idle_check_in_seconds = Column(Float)
    automatic_reflection_time = Column(Time, nullable=True)
    wake_word = Column(String, default="Hey Focus")
    created_at = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True))
