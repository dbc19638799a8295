"""ORM model registry; import all models so Alembic autogenerate discovers them."""

from civicos.models.election import Candidate, CandidatePolicy, Election, ElectoralDistrict
from civicos.models.legal import CriminalCodeSection, LegalAct, LegalCase
from civicos.models.politician import (
    CampaignFinance,
    ParliamentMember,
    Politician,
    PoliticianPosition,
    PoliticianStatement,
    PoliticianTruthTracking,
)
from civicos.models.social import Friendship, Message, SocialPost
from civicos.models.user import User

__all__ = [
    "CampaignFinance",
    "Candidate",
    "CandidatePolicy",
    "CriminalCodeSection",
    "Election",
    "ElectoralDistrict",
    "Friendship",
    "LegalAct",
    "LegalCase",
    "Message",
    "ParliamentMember",
    "Politician",
    "PoliticianPosition",
    "PoliticianStatement",
    "PoliticianTruthTracking",
    "SocialPost",
    "User",
]
