from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str
    service_name: str


class RangeRule(BaseModel):
    min: int
    max: int


class ValidationRules(BaseModel):
    topic: RangeRule
    name: RangeRule
    email: RangeRule
    message: RangeRule


class RateLimitWindow(BaseModel):
    window_seconds: int
    max_requests: int
    error: str = "Too many requests"
    message: str = "Rate limit exceeded. Please try again later."


class RateLimitRules(BaseModel):
    generate: RateLimitWindow
    contact: RateLimitWindow
    client_cooldown_seconds: int = 5
    exempt_paths: list[str] = Field(default_factory=lambda: ["/health"])


class RequestRules(BaseModel):
    max_body_bytes: int


class GenerationRules(BaseModel):
    model: str
    fallback_line: str
    max_words: int


class ContentDefaults(BaseModel):
    artist: str
    duration: str
    genre: str
    cover: str
    subtitle: str
    purchase_url: str
    service_icons: list[str]


class ContentRules(BaseModel):
    source_url: str
    tracks_per_page: int
    services_per_page: int
    audio_extensions: list[str]
    defaults: ContentDefaults


class OpsRules(BaseModel):
    required_env: list[str]


class Rules(BaseModel):
    project: ProjectRules
    validation: ValidationRules
    rate_limits: RateLimitRules
    requests: RequestRules
    generation: GenerationRules
    content: ContentRules
    ops: OpsRules
