"""Project member domain model"""
from typing import Optional

from .task import CamelModel


MEMBER_ROLE = "Member"


class MemberProfile(CamelModel):
    """User profile nested in a project-member envelope"""
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class ProjectMember(CamelModel):
    """Project-member envelope returned by the members endpoint"""
    id: Optional[str] = None
    project_id: Optional[str] = None
    member: Optional[MemberProfile] = None


class Member(CamelModel):
    """Flattened member used for name lookup and the member filter checklist"""
    id: str
    name: str
    email: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_project_member(cls, project_member: ProjectMember) -> Optional["Member"]:
        """Flatten an envelope; envelopes without a member are skipped"""
        profile = project_member.member
        if profile is None:
            return None
        return cls(
            id=profile.id,
            name=profile.full_name or profile.email or profile.id,
            email=profile.email,
            role=profile.role,
        )

    def is_member_role(self) -> bool:
        return (self.role or "").lower() == MEMBER_ROLE.lower()
