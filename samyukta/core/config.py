# samyukta/core/config.py

from typing import List

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from samyukta.constants.tracks import CompetitionTrack, WorkshopTrack


class CapacityLimits(BaseModel):
    """
    Fixed capacity limits for the event.

    Read-only at runtime. Passed into the slot service instead of being
    scattered around call sites as literals.
    """

    model_config = {"frozen": True}

    max_total: int = Field(400, ge=0)
    max_cloud: int = Field(200, ge=0)
    max_ai: int = Field(200, ge=0)
    max_cybersecurity: int = Field(200, ge=0)
    max_hackathon: int = Field(250, ge=0)
    max_pitch: int = Field(250, ge=0)

    # Soft threshold below max_total that unlocks direct join
    direct_join_threshold: int = Field(350, ge=0)
    direct_join_hackathon_price: int = Field(400, ge=0)
    direct_join_pitch_price: int = Field(300, ge=0)

    def for_workshop(self, track: WorkshopTrack) -> int:
        limits = {
            WorkshopTrack.CLOUD: self.max_cloud,
            WorkshopTrack.AI: self.max_ai,
            WorkshopTrack.CYBERSECURITY: self.max_cybersecurity,
        }
        if track not in limits:
            raise KeyError(f"Workshop track {track.value!r} has no capacity limit")
        return limits[track]

    def for_competition(self, track: CompetitionTrack) -> int:
        limits = {
            CompetitionTrack.HACKATHON: self.max_hackathon,
            CompetitionTrack.PITCH: self.max_pitch,
        }
        if track not in limits:
            raise KeyError(f"Competition track {track.value!r} has no capacity limit")
        return limits[track]

    def direct_join_price(self, track: CompetitionTrack) -> int:
        if track == CompetitionTrack.HACKATHON:
            return self.direct_join_hackathon_price
        if track == CompetitionTrack.PITCH:
            return self.direct_join_pitch_price
        raise KeyError(f"Direct join is not offered for {track.value!r}")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    DATABASE_URL_LOCAL: str = "sqlite:///./samyukta.db"
    DATABASE_URL_PROD: str = ""

    # Secrets
    JWT_SECRET: str = "CHANGE-ME-IN-PRODUCTION"
    QR_SIGNING_SECRET: str = "CHANGE-ME-IN-PRODUCTION-use-a-64-char-random-string"
    QR_REQUIRE_SIGNATURE: bool = True
    QR_TOKEN_TTL_DAYS: int = 30

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000"
    AUTO_CREATE_TABLES: bool = False

    # --- Capacity ---
    MAX_TOTAL_PARTICIPANTS: int = 400
    MAX_CLOUD: int = 200
    MAX_AI: int = 200
    MAX_CYBERSECURITY: int = 200
    MAX_HACKATHON: int = 250
    MAX_PITCH: int = 250
    DIRECT_JOIN_THRESHOLD: int = 350
    DIRECT_JOIN_HACKATHON_PRICE: int = 400
    DIRECT_JOIN_PITCH_PRICE: int = 300

    @property
    def DATABASE_URL(self) -> str:
        return (
            self.DATABASE_URL_LOCAL if self.ENV == "local" else self.DATABASE_URL_PROD
        )

    @property
    def capacity(self) -> CapacityLimits:
        return CapacityLimits(
            max_total=self.MAX_TOTAL_PARTICIPANTS,
            max_cloud=self.MAX_CLOUD,
            max_ai=self.MAX_AI,
            max_cybersecurity=self.MAX_CYBERSECURITY,
            max_hackathon=self.MAX_HACKATHON,
            max_pitch=self.MAX_PITCH,
            direct_join_threshold=self.DIRECT_JOIN_THRESHOLD,
            direct_join_hackathon_price=self.DIRECT_JOIN_HACKATHON_PRICE,
            direct_join_pitch_price=self.DIRECT_JOIN_PITCH_PRICE,
        )

    def get_cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from a comma-separated string."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Create a single instance of the settings
settings = Settings()
