from research_requirements.domain.models import VacancyStatus


def forward_status(current: VacancyStatus, requested: VacancyStatus) -> VacancyStatus:
    """
    Переход статуса только вперёд (SAVED < SUBMITTED < APPROVED):
      • SAVED принимает любой запрошенный статус;
      • SUBMITTED переходит только в APPROVED, иначе остаётся SUBMITTED;
      • APPROVED поглощающий — любой запрос схлопывается в APPROVED.
    """
    if current is VacancyStatus.SAVED:
        return requested
    if current is VacancyStatus.SUBMITTED:
        return VacancyStatus.APPROVED if requested is VacancyStatus.APPROVED else VacancyStatus.SUBMITTED
    return VacancyStatus.APPROVED
