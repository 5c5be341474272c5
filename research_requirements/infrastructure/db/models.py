from sqlalchemy import JSON, Boolean, Column, Date, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class RecruitmentSessionModel(Base):
    __tablename__ = 'recruitment_sessions'
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False, unique=True)
    status = Column(String, nullable=False, index=True)  # OPEN / CLOSED / APPROVED
    description = Column(String, nullable=False, default="")
    end_date = Column(Date, nullable=False)


class DepartmentModel(Base):
    __tablename__ = 'departments'
    id = Column(String, primary_key=True)
    short_code = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)


class UserModel(Base):
    __tablename__ = 'users'
    id = Column(String, primary_key=True)
    username = Column(String, nullable=False, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    user_type = Column(String, nullable=False, index=True)
    erp_id = Column(String, nullable=False)
    memberships = relationship(
        'UserDepartmentModel', back_populates='user', cascade='all, delete-orphan', lazy='selectin',
    )


class UserDepartmentModel(Base):
    __tablename__ = 'user_departments'
    # composite PK: user + department
    user_id = Column(String, ForeignKey('users.id'), primary_key=True)
    dept_short_code = Column(String, ForeignKey('departments.short_code'), primary_key=True)
    user = relationship('UserModel', back_populates='memberships')


class ResearchRequirementModel(Base):
    """
    Версия заявки. Документные поля (вакансии, утверждённые места, ремарки) — JSON.
    """
    __tablename__ = 'research_requirements'
    id = Column(String, primary_key=True)
    session_id = Column(String, ForeignKey('recruitment_sessions.id'), nullable=False)
    dept_short_code = Column(String, ForeignKey('departments.short_code'), nullable=False)
    requested_vacancy = Column(JSON, nullable=False, default=list)
    approved_vacancy = Column(JSON, nullable=False, default=list)
    vacancy_status = Column(String, nullable=False)
    requirement_status = Column(String, nullable=False)
    remarks = Column(JSON, nullable=False, default=list)
    version = Column(Integer, nullable=False)
    is_archived = Column(Boolean, nullable=False, default=False)
    submitted_on = Column(Date, nullable=False)
    latest_updated_on = Column(Date, nullable=False)

    __table_args__ = (
        Index('ix_research_requirements_dept_archived', 'dept_short_code', 'is_archived'),
        Index('ix_research_requirements_session_dept', 'session_id', 'dept_short_code'),
        # не более одной активной версии на (сессия, кафедра)
        Index(
            'uq_research_requirements_active',
            'session_id', 'dept_short_code',
            unique=True,
            sqlite_where=text('is_archived = 0'),
            postgresql_where=text('is_archived = false'),
        ),
    )
