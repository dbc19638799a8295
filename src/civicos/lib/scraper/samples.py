"""Curated civic records used when a live source yields nothing.

Each accessor returns fresh record instances so callers may mutate them.
"""

from datetime import date

from civicos.lib.scraper.records import (
    CandidateRecord,
    CriminalCodeRecord,
    DistrictRecord,
    ElectionRecord,
    LegalActRecord,
    LegalCaseRecord,
    PoliticianRecord,
    PolicyRecord,
)
from civicos.lib.scraper.sources import next_federal_election_year

# ---------------------------------------------------------------------------
# Election schedules
# ---------------------------------------------------------------------------


def _advance_days(year: int, month: int, first_day: int) -> list[str]:
    return [date(year, month, first_day + offset).isoformat() for offset in range(4)]


def federal_elections(today: date) -> list[ElectionRecord]:
    """Next scheduled general election plus the most recent one."""
    year = next_federal_election_year(today)
    return [
        ElectionRecord(
            election_type="federal",
            jurisdiction="Canada",
            title="44th Canadian Federal Election",
            election_date=date(year, 10, 20),
            status="upcoming",
            description=(
                "General election for the House of Commons of Canada. "
                "All 338 electoral districts will elect Members of Parliament."
            ),
            source_name="Elections Canada",
            source_url="https://www.elections.ca",
            registration_deadline=date(year, 10, 13),
            advance_voting_dates=_advance_days(year, 10, 10),
        ),
        ElectionRecord(
            election_type="federal",
            jurisdiction="Canada",
            title="43rd Canadian Federal Election",
            election_date=date(2021, 9, 20),
            status="completed",
            description=(
                "General election for the House of Commons of Canada. "
                "The Liberal Party won a minority government."
            ),
            source_name="Elections Canada",
            source_url="https://www.elections.ca",
            registration_deadline=date(2021, 9, 13),
            advance_voting_dates=_advance_days(2021, 9, 10),
        ),
    ]


def provincial_elections() -> list[ElectionRecord]:
    """Scheduled provincial general elections."""
    return [
        ElectionRecord(
            election_type="provincial",
            jurisdiction="Ontario",
            title="43rd Ontario General Election",
            election_date=date(2026, 6, 4),
            status="upcoming",
            description=(
                "General election for the Legislative Assembly of Ontario. "
                "All 124 electoral districts will elect Members of Provincial Parliament."
            ),
            source_name="Elections Ontario",
            source_url="https://www.elections.on.ca",
            registration_deadline=date(2026, 5, 28),
            advance_voting_dates=_advance_days(2026, 5, 28),
        ),
        ElectionRecord(
            election_type="provincial",
            jurisdiction="British Columbia",
            title="42nd British Columbia General Election",
            election_date=date(2024, 10, 19),
            status="completed",
            description=(
                "General election for the Legislative Assembly of British Columbia. "
                "The BC NDP won a majority government."
            ),
            source_name="Elections BC",
            source_url="https://elections.bc.ca",
            registration_deadline=date(2024, 10, 12),
            advance_voting_dates=_advance_days(2024, 10, 12),
        ),
        ElectionRecord(
            election_type="provincial",
            jurisdiction="Alberta",
            title="31st Alberta General Election",
            election_date=date(2027, 5, 31),
            status="upcoming",
            description=(
                "General election for the Legislative Assembly of Alberta. "
                "All 87 electoral districts will elect Members of the Legislative Assembly."
            ),
            source_name="Elections Alberta",
            source_url="https://www.elections.ab.ca",
            registration_deadline=date(2027, 5, 24),
            advance_voting_dates=_advance_days(2027, 5, 24),
        ),
        ElectionRecord(
            election_type="provincial",
            jurisdiction="Quebec",
            title="44th Quebec General Election",
            election_date=date(2026, 10, 5),
            status="upcoming",
            description=(
                "General election for the National Assembly of Quebec. "
                "All 125 electoral districts will elect Members of the National Assembly."
            ),
            source_name="Elections Quebec",
            source_url="https://www.electionsquebec.qc.ca",
            registration_deadline=date(2026, 9, 28),
            advance_voting_dates=["2026-09-28", "2026-09-29", "2026-09-30", "2026-10-01"],
        ),
    ]


def provincial_election_date(province_name: str) -> date | None:
    """Scheduled date of a province's next (or latest) general election."""
    for record in provincial_elections():
        if record.jurisdiction == province_name:
            return record.election_date
    return None


def municipal_elections() -> list[ElectionRecord]:
    """Scheduled municipal general elections for the largest cities."""
    return [
        ElectionRecord(
            election_type="municipal",
            jurisdiction="Toronto, Ontario",
            title="2026 Toronto Municipal Election",
            election_date=date(2026, 10, 26),
            status="upcoming",
            description=(
                "Municipal election for the City of Toronto. Voters will elect the Mayor, "
                "City Councillors, and School Board Trustees."
            ),
            source_name="Toronto Elections",
            source_url="https://www.toronto.ca/city-government/elections",
            registration_deadline=date(2026, 10, 19),
            advance_voting_dates=_advance_days(2026, 10, 19),
        ),
        ElectionRecord(
            election_type="municipal",
            jurisdiction="Vancouver, British Columbia",
            title="2026 Vancouver Municipal Election",
            election_date=date(2026, 10, 17),
            status="upcoming",
            description=(
                "Municipal election for the City of Vancouver. Voters will elect the Mayor, "
                "City Councillors, and School Board Trustees."
            ),
            source_name="Vancouver Elections",
            source_url="https://vancouver.ca/your-government/elections",
            registration_deadline=date(2026, 10, 10),
            advance_voting_dates=_advance_days(2026, 10, 10),
        ),
        ElectionRecord(
            election_type="municipal",
            jurisdiction="Montreal, Quebec",
            title="2025 Montreal Municipal Election",
            election_date=date(2025, 11, 2),
            status="upcoming",
            description=(
                "Municipal election for the City of Montreal. Voters will elect the Mayor, "
                "City Councillors, and Borough Councillors."
            ),
            source_name="Montreal Elections",
            source_url="https://montreal.ca/en/elections",
            registration_deadline=date(2025, 10, 26),
            advance_voting_dates=_advance_days(2025, 10, 26),
        ),
    ]


# ---------------------------------------------------------------------------
# Sample election set (elections, candidates, policies, districts)
# ---------------------------------------------------------------------------


def sample_elections() -> list[ElectionRecord]:
    """Elections that anchor the sample candidate data."""
    return [
        ElectionRecord(
            election_type="federal",
            jurisdiction="Canada",
            title="2025 Federal Election",
            election_date=date(2025, 10, 20),
            status="upcoming",
            source_name="Elections Canada",
            source_url="https://www.elections.ca",
            registration_deadline=date(2025, 9, 15),
            advance_voting_dates=_advance_days(2025, 10, 10),
        ),
        ElectionRecord(
            election_type="provincial",
            jurisdiction="Ontario",
            title="2026 Ontario Provincial Election",
            election_date=date(2026, 6, 4),
            status="upcoming",
            source_name="Elections Ontario",
            source_url="https://www.elections.on.ca",
            registration_deadline=date(2026, 5, 1),
        ),
        ElectionRecord(
            election_type="by-election",
            jurisdiction="Canada",
            title="Toronto-St. Paul's By-Election",
            election_date=date(2025, 3, 15),
            status="ongoing",
            source_name="Elections Canada",
            source_url="https://www.elections.ca",
        ),
    ]


def sample_candidates() -> list[CandidateRecord]:
    """Candidates attached to every sample election."""
    return [
        CandidateRecord(
            name="Sarah Johnson",
            party="Liberal Party of Canada",
            constituency="Toronto Centre",
            occupation="Former City Councillor",
            key_platform_points=["Climate Action", "Affordable Housing", "Healthcare Investment"],
            campaign_promises=[
                "Carbon neutral by 2030",
                "Build 50,000 affordable housing units",
                "Increase healthcare funding by 15%",
            ],
            endorsements=["Toronto Star", "Environmental Groups"],
        ),
        CandidateRecord(
            name="Michael Chen",
            party="Conservative Party of Canada",
            constituency="Toronto Centre",
            occupation="Small Business Owner",
            key_platform_points=["Economic Growth", "Tax Reduction", "Public Safety"],
            campaign_promises=["Cut corporate taxes", "Increase police funding", "Support small businesses"],
            endorsements=["Chamber of Commerce"],
        ),
        CandidateRecord(
            name="Amanda Williams",
            party="New Democratic Party",
            constituency="Toronto Centre",
            occupation="Union Organizer",
            key_platform_points=["Workers' Rights", "Universal Healthcare", "Education Funding"],
            campaign_promises=["$15 minimum wage", "Expand universal healthcare", "Free post-secondary education"],
            endorsements=["Labour Unions", "Student Organizations"],
        ),
    ]


def sample_policies() -> list[PolicyRecord]:
    """Policies attached to every sample candidate."""
    return [
        PolicyRecord(
            policy_area="healthcare",
            policy_title="Universal Healthcare Expansion",
            policy_description=(
                "Comprehensive plan to expand healthcare coverage to include dental, vision, "
                "and mental health services."
            ),
            implementation_plan=(
                "Phase 1: Dental coverage for children. Phase 2: Expand to all Canadians. "
                "Phase 3: Add vision and mental health."
            ),
            estimated_cost="$8.5 billion over 4 years",
            timeline="4 years",
            priority="high",
        ),
        PolicyRecord(
            policy_area="environment",
            policy_title="Green Energy Transition",
            policy_description=(
                "Accelerate Canada's transition to renewable energy sources and achieve net-zero emissions."
            ),
            implementation_plan="Massive investment in solar, wind, and hydroelectric infrastructure.",
            estimated_cost="$50 billion over 10 years",
            timeline="10 years",
            priority="high",
        ),
        PolicyRecord(
            policy_area="economy",
            policy_title="Innovation and Technology Fund",
            policy_description=(
                "Support Canadian tech startups and innovation through targeted funding and tax incentives."
            ),
            implementation_plan="Create dedicated fund for Canadian tech companies and research institutions.",
            estimated_cost="$2 billion annually",
            timeline="Ongoing",
            priority="medium",
        ),
    ]


def sample_districts() -> list[DistrictRecord]:
    """Electoral district profiles."""
    return [
        DistrictRecord(
            district_name="Toronto Centre",
            district_number="35079",
            province="Ontario",
            population=109435,
            area=8.89,
            key_issues=["Housing Affordability", "Transit", "Climate Change"],
            major_cities=["Toronto"],
            current_representative="Chrystia Freeland",
            last_election_turnout=72.3,
            is_urban=True,
            is_rural=False,
        ),
        DistrictRecord(
            district_name="Calgary Heritage",
            district_number="48012",
            province="Alberta",
            population=137842,
            area=327.45,
            key_issues=["Energy Transition", "Economic Diversification", "Infrastructure"],
            major_cities=["Calgary"],
            current_representative="Bob Benzen",
            last_election_turnout=68.9,
            is_urban=True,
            is_rural=False,
        ),
        DistrictRecord(
            district_name="Prince Edward Island",
            district_number="11001",
            province="Prince Edward Island",
            population=119231,
            area=5683.91,
            key_issues=["Fisheries", "Agriculture", "Tourism"],
            major_cities=["Charlottetown", "Summerside"],
            current_representative="Wayne Easter",
            last_election_turnout=79.4,
            is_urban=False,
            is_rural=True,
        ),
    ]


# ---------------------------------------------------------------------------
# Politicians
# ---------------------------------------------------------------------------


def _expenses(travel: int, hospitality: int, office: int, year: int) -> dict:
    return {
        "travel": travel,
        "hospitality": hospitality,
        "office": office,
        "total": travel + hospitality + office,
        "year": str(year),
    }


def federal_politicians(year: int) -> list[PoliticianRecord]:
    """Federal MPs used when the House of Commons member feed is unreachable."""
    return [
        PoliticianRecord(
            name="Chrystia Freeland",
            level="federal",
            jurisdiction="Canada",
            party="Liberal",
            position="Member of Parliament",
            riding="University—Rosedale",
            civic_level="Federal Representative",
            recent_activity="Active in Parliament",
            bio="Member of Parliament representing constituents.",
            policy_positions=["Democracy", "Transparency", "Public Service"],
            key_achievements=["Elected to Parliament", "Serving constituents"],
            committees=["Finance"],
            expenses=_expenses(0, 0, 0, year),
            is_incumbent=True,
        ),
        PoliticianRecord(
            name="Pierre Poilievre",
            level="federal",
            jurisdiction="Canada",
            party="Conservative",
            position="Member of Parliament",
            riding="Battle River—Crowfoot",
            civic_level="Federal Representative",
            recent_activity="Active in Parliament",
            bio="Member of Parliament representing constituents.",
            policy_positions=["Democracy", "Transparency", "Public Service"],
            key_achievements=["Elected to Parliament", "Serving constituents"],
            expenses=_expenses(0, 0, 0, year),
            is_incumbent=True,
        ),
    ]


def provincial_politicians(year: int) -> list[PoliticianRecord]:
    """Provincial premiers."""
    return [
        PoliticianRecord(
            name="Doug Ford",
            level="provincial",
            jurisdiction="Ontario",
            party="Progressive Conservative",
            position="Premier",
            riding="Etobicoke North",
            civic_level="Provincial Premier",
            recent_activity="Leading Ontario government",
            policy_positions=["Economic Development", "Infrastructure", "Healthcare"],
            contact_info={
                "email": "premier@ontario.ca",
                "office": "Queen's Park, Toronto",
                "website": "https://www.ontario.ca/premier",
            },
            bio="Premier of Ontario since 2018, leading the Progressive Conservative government.",
            key_achievements=["Premier of Ontario", "Mayor of Toronto"],
            committees=["Cabinet", "Executive Council"],
            expenses=_expenses(15000, 5000, 25000, year),
            is_incumbent=True,
        ),
        PoliticianRecord(
            name="David Eby",
            level="provincial",
            jurisdiction="British Columbia",
            party="New Democratic",
            position="Premier",
            riding="Vancouver-Point Grey",
            civic_level="Provincial Premier",
            recent_activity="Leading BC government",
            policy_positions=["Housing", "Climate Action", "Healthcare"],
            contact_info={
                "email": "premier@gov.bc.ca",
                "office": "Parliament Buildings, Victoria",
                "website": "https://www2.gov.bc.ca/gov/content/governments/organizational-structure/premier",
            },
            bio="Premier of British Columbia since 2022, leading the NDP government.",
            key_achievements=["Premier of BC", "Attorney General"],
            committees=["Cabinet", "Executive Council"],
            expenses=_expenses(12000, 4000, 22000, year),
            is_incumbent=True,
        ),
    ]


def municipal_politicians(year: int) -> list[PoliticianRecord]:
    """Mayors of the largest cities."""
    return [
        PoliticianRecord(
            name="Olivia Chow",
            level="municipal",
            jurisdiction="Toronto, Ontario",
            party="Independent",
            position="Mayor",
            riding="Toronto",
            civic_level="Municipal Mayor",
            recent_activity="Leading Toronto city government",
            policy_positions=["Transit", "Housing", "Community Safety"],
            contact_info={
                "email": "mayor@toronto.ca",
                "office": "Toronto City Hall",
                "website": "https://www.toronto.ca/mayor",
            },
            bio="Mayor of Toronto since 2023, former Member of Parliament and city councillor.",
            key_achievements=["Mayor of Toronto", "MP for Trinity-Spadina"],
            committees=["Executive Committee", "City Council"],
            expenses=_expenses(8000, 3000, 18000, year),
            is_incumbent=True,
        ),
        PoliticianRecord(
            name="Ken Sim",
            level="municipal",
            jurisdiction="Vancouver, British Columbia",
            party="ABC Vancouver",
            position="Mayor",
            riding="Vancouver",
            civic_level="Municipal Mayor",
            recent_activity="Leading Vancouver city government",
            policy_positions=["Public Safety", "Housing", "Economic Development"],
            contact_info={
                "email": "mayor@vancouver.ca",
                "office": "Vancouver City Hall",
                "website": "https://vancouver.ca/your-government/mayor-and-council",
            },
            bio="Mayor of Vancouver since 2022, leading the ABC Vancouver party.",
            key_achievements=["Mayor of Vancouver", "Business leader"],
            committees=["Council", "Executive Committee"],
            expenses=_expenses(7000, 2500, 16000, year),
            is_incumbent=True,
        ),
    ]


# ---------------------------------------------------------------------------
# Legal references
# ---------------------------------------------------------------------------


def criminal_code_sections() -> list[CriminalCodeRecord]:
    """Frequently referenced Criminal Code sections."""
    return [
        CriminalCodeRecord(
            section_number="83.01",
            title="Terrorist Activity",
            full_text=(
                "Every person who knowingly participates in or contributes to, directly or indirectly, any "
                "activity of a terrorist group for the purpose of enhancing the ability of any terrorist group "
                "to facilitate or carry out a terrorist activity is guilty of an indictable offence and liable "
                "to imprisonment for a term not exceeding ten years."
            ),
            summary="Prohibits participation in terrorist activities",
            penalties="Up to 10 years imprisonment",
            category="National Security",
        ),
        CriminalCodeRecord(
            section_number="151",
            title="Sexual Interference",
            full_text=(
                "Every person who, for a sexual purpose, touches, directly or indirectly, with a part of the "
                "body or with an object, any part of the body of a person under the age of 16 years is guilty "
                "of an indictable offence and liable to imprisonment for a term not exceeding 14 years."
            ),
            summary="Prohibits sexual contact with minors",
            penalties="Up to 14 years imprisonment",
            category="Sexual Offences",
        ),
        CriminalCodeRecord(
            section_number="220",
            title="Criminal Negligence Causing Death",
            full_text=(
                "Every person who by criminal negligence causes death to another person is guilty of an "
                "indictable offence and liable to imprisonment for life."
            ),
            summary="Criminal negligence resulting in death",
            penalties="Life imprisonment",
            category="Homicide",
        ),
        CriminalCodeRecord(
            section_number="264",
            title="Criminal Harassment",
            full_text=(
                "No person shall, without lawful authority and knowing that another person is harassed or "
                "recklessly as to whether the other person is harassed, engage in conduct referred to in "
                "subsection (2) that causes that other person reasonably, in all the circumstances, to fear "
                "for their safety or the safety of anyone known to them."
            ),
            summary="Prohibits stalking and harassment",
            penalties="Up to 10 years imprisonment",
            category="Harassment",
        ),
        CriminalCodeRecord(
            section_number="334",
            title="Theft",
            full_text=(
                "Every one commits theft who fraudulently and without colour of right takes, or fraudulently "
                "and without colour of right converts to his use or to the use of another person, anything, "
                "whether animate or inanimate, with intent to deprive, temporarily or absolutely, the owner of "
                "it or a person who has a special property or interest in it, of the thing or of his property "
                "or interest in it."
            ),
            summary="Prohibits theft of property",
            penalties="Up to 10 years imprisonment",
            category="Property Crimes",
        ),
        CriminalCodeRecord(
            section_number="380",
            title="Fraud",
            full_text=(
                "Every one who, by deceit, falsehood or other fraudulent means, whether or not it is a false "
                "pretence within the meaning of this Act, defrauds the public or any person, whether "
                "ascertained or not, of any property, money or valuable security or any service is guilty of "
                "an indictable offence."
            ),
            summary="Prohibits fraud and deception",
            penalties="Up to 14 years imprisonment",
            category="Fraud",
        ),
        CriminalCodeRecord(
            section_number="430",
            title="Mischief",
            full_text=(
                "Every one commits mischief who wilfully destroys or damages property, renders property "
                "dangerous, useless, inoperative or ineffective, or interferes with the lawful use, enjoyment "
                "or operation of property."
            ),
            summary="Prohibits damage to property",
            penalties="Up to 10 years imprisonment",
            category="Property Crimes",
        ),
        CriminalCodeRecord(
            section_number="462.31",
            title="Money Laundering",
            full_text=(
                "Every one commits an offence who uses, transfers the possession of, sends or delivers to any "
                "person or place, transports, transmits, alters, disposes of or otherwise deals with, in any "
                "manner and by any means, any property or any proceeds of any property with intent to conceal "
                "or convert that property or those proceeds, knowing or believing that all or a part of that "
                "property or of those proceeds was obtained or derived directly or indirectly as a result of "
                "the commission in Canada of a designated offence."
            ),
            summary="Prohibits money laundering",
            penalties="Up to 10 years imprisonment",
            category="Financial Crimes",
        ),
    ]


def federal_acts() -> list[LegalActRecord]:
    """Commonly consulted federal statutes."""
    return [
        LegalActRecord(
            title="Canadian Human Rights Act",
            year=1977,
            summary="Prohibits discrimination in federally regulated activities",
            key_provisions=["Equal opportunity", "Anti-discrimination", "Human rights complaints"],
            category="Human Rights",
            source="curated",
        ),
        LegalActRecord(
            title="Privacy Act",
            year=1983,
            summary=(
                "Governs the collection, use, and disclosure of personal information by federal "
                "government institutions"
            ),
            key_provisions=["Personal information protection", "Access to personal information", "Privacy rights"],
            category="Privacy",
            source="curated",
        ),
        LegalActRecord(
            title="Personal Information Protection and Electronic Documents Act (PIPEDA)",
            year=2000,
            summary="Governs how private sector organizations collect, use, and disclose personal information",
            key_provisions=["Consent requirements", "Data protection", "Electronic documents"],
            category="Privacy",
            source="curated",
        ),
        LegalActRecord(
            title="Cannabis Act",
            year=2018,
            summary="Legalizes and regulates the production, distribution, and consumption of cannabis",
            key_provisions=["Legal cannabis", "Age restrictions", "Licensing requirements"],
            category="Health",
            source="curated",
        ),
        LegalActRecord(
            title="Impact Assessment Act",
            year=2019,
            summary="Establishes a federal impact assessment regime for major projects",
            key_provisions=["Environmental assessment", "Indigenous consultation", "Public participation"],
            category="Environment",
            source="curated",
        ),
    ]


def provincial_acts() -> list[LegalActRecord]:
    """Landmark provincial statutes."""
    return [
        LegalActRecord(
            title="Ontario Human Rights Code",
            jurisdiction="Ontario",
            year=1962,
            summary="Prohibits discrimination in Ontario",
            key_provisions=["Equal treatment", "Accommodation", "Anti-discrimination"],
            category="Human Rights",
            source="curated",
        ),
        LegalActRecord(
            title="Charter of the French Language",
            jurisdiction="Quebec",
            year=1977,
            summary="Establishes French as the official language of Quebec",
            key_provisions=["French language rights", "Language requirements", "Signage regulations"],
            category="Language",
            source="curated",
        ),
        LegalActRecord(
            title="Environmental Management Act",
            jurisdiction="British Columbia",
            year=2003,
            summary="Governs environmental protection in British Columbia",
            key_provisions=["Environmental protection", "Waste management", "Air quality"],
            category="Environment",
            source="curated",
        ),
        LegalActRecord(
            title="Alberta Human Rights Act",
            jurisdiction="Alberta",
            year=1972,
            summary="Prohibits discrimination in Alberta",
            key_provisions=["Equal rights", "Anti-discrimination", "Human rights complaints"],
            category="Human Rights",
            source="curated",
        ),
    ]


def legal_cases() -> list[LegalCaseRecord]:
    """Supreme Court of Canada decisions frequently cited in civic discussion."""
    return [
        LegalCaseRecord(
            case_number="2016 SCC 27",
            title="R. v. Jordan",
            description="Set presumptive ceilings on the time between criminal charges and the end of trial.",
            status="decided",
        ),
        LegalCaseRecord(
            case_number="2015 SCC 5",
            title="Carter v. Canada (Attorney General)",
            description="Struck down the blanket prohibition on physician-assisted death.",
            status="decided",
        ),
    ]
