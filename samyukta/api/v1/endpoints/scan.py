# samyukta/api/v1/endpoints/scan.py
"""
QR scanning.

/scan/resolve only recovers the identity a QR code carries. /scan looks the
participant up: a public scan gets a name and a light-hearted message, a
coordinator scan gets the full participant and team record.
"""

import logging
import random
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from samyukta.api import deps
from samyukta.constants.tracks import ParticipantRole, ScanType
from samyukta.core.exceptions import ParticipantNotFoundError, ValidationError
from samyukta.core.limiter import SCAN_RATE_LIMIT, limiter
from samyukta.crud.crud_registration import team_member as team_member_crud
from samyukta.db.session import get_db
from samyukta.models.team_member import TeamMember
from samyukta.schemas.qr import (
    CoordinatorScanResult,
    PublicScanResult,
    QRPayload,
    ResolveRequest,
    ScannedParticipant,
    ScannedTeam,
    ScannedTeamMember,
    ScanRequest,
)
from samyukta.schemas.token import TokenPayload
from samyukta.services.check_in.qr_generator import QRCodeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scan", tags=["Scan"])

PUBLIC_SCAN_MESSAGES = [
    "You found a wild participant! They're probably looking for free food.",
    "Beep boop! This human is 99% caffeine and 1% code.",
    "Plot twist: This person is actually three cats in a trench coat.",
    "Warning: May spontaneously burst into tech jargon.",
    "Congratulations! You've unlocked a new friend (batteries not included).",
    "This participant's superpower is turning coffee into code.",
    "Achievement unlocked: Social interaction initiated!",
    "Fun fact: This person once debugged code in their sleep.",
    "Caution: Highly caffeinated and ready to network!",
    "This participant collects bugs... the coding kind, hopefully.",
]

STAFF_ROLES = (ParticipantRole.COORDINATOR, ParticipantRole.ADMIN)


def _resolve_or_400(qr_service: QRCodeService, qr_text: str) -> QRPayload:
    payload = qr_service.resolve(qr_text)
    if payload is None:
        raise ValidationError("Invalid or unreadable QR code", field="qr_text")
    return payload


def build_coordinator_result(member: TeamMember) -> CoordinatorScanResult:
    registration = member.registration
    return CoordinatorScanResult(
        participant=ScannedParticipant(
            id=member.participant_id,
            name=member.full_name,
            email=member.email,
            whatsapp=member.whatsapp,
            college=member.college,
            year=member.year,
            department=member.department,
            food_preference=member.food_preference.value,
            accommodation=member.accommodation,
            accommodation_status=member.accommodation_status.value,
            present=member.present,
        ),
        team=ScannedTeam(
            team_id=registration.team_id,
            college=registration.college,
            team_size=registration.team_size,
            ticket_type=registration.ticket_type.value,
            workshop_track=registration.workshop_track.value,
            competition_track=registration.competition_track.value,
            status=registration.status.value,
            total_amount=registration.total_amount,
            members=[
                ScannedTeamMember(
                    name=m.full_name,
                    email=m.email,
                    participant_id=m.participant_id,
                    present=m.present,
                )
                for m in registration.members
            ],
        ),
    )


@router.post("/resolve", response_model=QRPayload)
@limiter.limit(SCAN_RATE_LIMIT)
def resolve_qr(
    request: Request,
    resolve_in: ResolveRequest,
    qr_service: QRCodeService = Depends(deps.get_qr_service),
):
    """Decode a scanned QR code. Authorizes nothing."""
    return _resolve_or_400(qr_service, resolve_in.qr_text)


@router.post("", response_model=PublicScanResult | CoordinatorScanResult)
@limiter.limit(SCAN_RATE_LIMIT)
def scan_participant(
    request: Request,
    scan_in: ScanRequest,
    db: Session = Depends(get_db),
    qr_service: QRCodeService = Depends(deps.get_qr_service),
    current_user: Optional[TokenPayload] = Depends(deps.get_current_user_optional),
):
    if scan_in.scan_type == ScanType.COORDINATOR:
        if current_user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Coordinator scan requires authentication",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if current_user.role not in STAFF_ROLES:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized to perform this action",
            )

    participant_id = scan_in.participant_id
    if not participant_id:
        participant_id = _resolve_or_400(qr_service, scan_in.qr_text).id

    member = team_member_crud.get_by_participant_id(db, participant_id=participant_id)
    if member is None:
        raise ParticipantNotFoundError(participant_id)

    if scan_in.scan_type == ScanType.PUBLIC:
        return PublicScanResult(
            message=random.choice(PUBLIC_SCAN_MESSAGES),
            participant_name=member.full_name,
        )

    logger.info(f"Coordinator {current_user.sub} scanned {participant_id}")
    return build_coordinator_result(member)
