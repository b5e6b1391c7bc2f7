# samyukta/services/check_in/qr_generator.py
"""
Participant QR codes.

generate() binds a signed identity payload to a team member and stores both
the text and the rendered PNG on the member row. resolve() turns scanned text
back into the payload; it recovers identity only and authorizes nothing.
"""

import base64
import io
import logging
import time
from typing import Optional

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from sqlalchemy.orm import Session

from samyukta.constants.tracks import CompetitionTrack, ParticipantRole, WorkshopTrack
from samyukta.core.exceptions import RegistrationNotFoundError
from samyukta.crud.crud_registration import team_member as team_member_crud
from samyukta.models.team_member import TeamMember
from samyukta.schemas.qr import MemberQRCode, QRArtifact, QRPayload, TeamQRCodes
from samyukta.services.check_in import qr_signing

logger = logging.getLogger(__name__)

ROLE_COLORS = {
    ParticipantRole.PARTICIPANT: "#1e40af",
    ParticipantRole.COORDINATOR: "#059669",
    ParticipantRole.ADMIN: "#dc2626",
}


def render_data_url(text: str, role: ParticipantRole = ParticipantRole.PARTICIPANT) -> str:
    """Render text as a PNG QR code and return it as a data URL."""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=4, border=2)
    qr.add_data(text)
    qr.make(fit=True)
    img = qr.make_image(fill_color=ROLE_COLORS[role], back_color="#ffffff")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def _track_label(workshop: Optional[WorkshopTrack], competition: Optional[CompetitionTrack]) -> Optional[str]:
    labels = [
        t.value
        for t in (workshop, competition)
        if t is not None and t.value != "None"
    ]
    return " + ".join(labels) or None


class QRCodeService:
    def __init__(self, signing_secret: str, require_signature: bool = True, ttl_days: int = 30):
        self.signing_secret = signing_secret
        self.require_signature = require_signature
        self.ttl_days = ttl_days

    def build_payload(
        self, member: TeamMember, role: ParticipantRole = ParticipantRole.PARTICIPANT
    ) -> QRPayload:
        registration = member.registration
        track = (
            _track_label(registration.workshop_track, registration.competition_track)
            if registration is not None
            else None
        )
        return QRPayload(
            id=member.participant_id,
            name=member.full_name,
            role=role,
            email=member.email,
            college=member.college,
            track=track,
            year=member.year,
            dept=member.department,
            timestamp=int(time.time() * 1000),
        )

    def encode(self, payload: QRPayload) -> QRArtifact:
        """Sign the payload and render it. No persistence."""
        payload_text = qr_signing.sign_payload(payload, self.signing_secret, self.ttl_days)
        return QRArtifact(
            payload=payload,
            payload_text=payload_text,
            image_data_url=render_data_url(payload_text, payload.role),
        )

    def generate(
        self,
        db: Session,
        member: TeamMember,
        role: ParticipantRole = ParticipantRole.PARTICIPANT,
    ) -> QRArtifact:
        """
        Generate a QR artifact for the member and store it on the member row.
        The row is flushed; the caller commits.
        """
        artifact = self.encode(self.build_payload(member, role))
        member.qr_payload = artifact.payload_text
        member.qr_code = artifact.image_data_url
        db.add(member)
        db.flush()
        logger.info(f"Generated QR code for participant {member.participant_id}")
        return artifact

    def generate_for_team(self, db: Session, team_id: str) -> TeamQRCodes:
        """(Re)generate and persist QR codes for every member of a team."""
        members = team_member_crud.get_by_team(db, team_id=team_id)
        if not members:
            raise RegistrationNotFoundError(team_id)

        qr_codes = []
        for member in members:
            artifact = self.generate(db, member)
            qr_codes.append(
                MemberQRCode(
                    participant_id=member.participant_id,
                    name=member.full_name,
                    qr_code=artifact.image_data_url,
                )
            )
        db.commit()
        return TeamQRCodes(team_id=team_id, qr_codes=qr_codes)

    def team_codes_for_email(self, db: Session, email: str) -> Optional[TeamQRCodes]:
        """Stored QR codes of the whole team that `email` belongs to."""
        member = team_member_crud.get_by_email(db, email=email)
        if member is None:
            return None
        members = team_member_crud.get_by_team(db, team_id=member.registration_id)
        return TeamQRCodes(
            team_id=member.registration_id,
            qr_codes=[
                MemberQRCode(participant_id=m.participant_id, name=m.full_name, qr_code=m.qr_code)
                for m in members
            ],
        )

    def resolve(self, scanned_text: Optional[str]) -> Optional[QRPayload]:
        """
        Parse scanned text back into a payload.

        Returns None for anything that is not a well-formed payload, including
        bad signatures. Never raises.
        """
        if not scanned_text or not scanned_text.strip():
            return None
        # Token-shaped text is never retried as legacy JSON
        if qr_signing.is_jwt_qr(scanned_text):
            return qr_signing.verify_payload(scanned_text, self.signing_secret)
        if self.require_signature:
            logger.info("Rejected unsigned QR payload")
            return None
        return qr_signing.parse_legacy_payload(scanned_text)
