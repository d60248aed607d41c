from pydantic import BaseModel


class CompanyCount(BaseModel):
    company: str
    count: int


class StatisticsResponse(BaseModel):
    total_applications: int
    status_distribution: dict[str, int]
    response_rate: int
    success_rate: int
    avg_days_to_response: int
    monthly_applications: dict[str, int]
    top_companies: list[CompanyCount]
