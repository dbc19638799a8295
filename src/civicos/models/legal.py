"""Legal reference models: acts, cases and Criminal Code sections."""

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from civicos.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class LegalAct(Base, UUIDMixin, TimestampMixin):
    """A federal or provincial statute."""

    __tablename__ = "legal_acts"

    title: Mapped[str] = mapped_column(String(400), nullable=False)
    jurisdiction: Mapped[str] = mapped_column(String(100), nullable=False, default="federal")
    act_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    key_provisions: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    full_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    source: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (UniqueConstraint("title", "jurisdiction", name="uq_legal_act_title_jurisdiction"),)


class LegalCase(Base, UUIDMixin, TimestampMixin):
    """A court case of public interest."""

    __tablename__ = "legal_cases"

    case_number: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(400), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    jurisdiction: Mapped[str] = mapped_column(String(100), nullable=False, default="federal")
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)


class CriminalCodeSection(Base, UUIDMixin):
    """A section of the Criminal Code of Canada."""

    __tablename__ = "criminal_code_sections"

    section_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    full_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    penalties: Mapped[str | None] = mapped_column(String(200), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
