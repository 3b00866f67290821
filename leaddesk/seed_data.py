"""Demo leads and the fixed team roster."""

from datetime import date

from leaddesk.models import Activity, ActivityType, Lead, LeadStatus, TeamMember


TEAM_MEMBERS: list[TeamMember] = [
    TeamMember(id="JD", name="John Doe", email="john@example.com", role="Admin"),
    TeamMember(id="JS", name="Jane Smith", email="jane@example.com", role="Sales Rep"),
    TeamMember(id="RJ", name="Robert Johnson", email="robert@example.com", role="Marketing"),
]


def team_member_ids() -> set[str]:
    return {member.id for member in TEAM_MEMBERS}


def demo_leads() -> list[Lead]:
    """Build a fresh copy of the 8 demo leads shown on a cold start."""
    return [
        Lead(
            id=1,
            name="John Smith",
            email="john@example.com",
            budget=150000,
            source="Website",
            score=85,
            status=LeadStatus.NEW,
            company="Acme Corp",
            last_contact=date(2023, 9, 15),
            notes="Initial contact made via website.",
            activities=[
                Activity(id=101, lead_id=1, date=date(2023, 9, 15), type=ActivityType.EMAIL,
                         description="Sent welcome email"),
                Activity(id=102, lead_id=1, date=date(2023, 9, 18), type=ActivityType.CALL,
                         description="Discussed product features"),
            ],
        ),
        Lead(
            id=2,
            name="Emily Johnson",
            email="emily@example.com",
            budget=250000,
            source="Referral",
            score=92,
            status=LeadStatus.CONTACTED,
            company="TechCorp",
            last_contact=date(2023, 9, 10),
            activities=[
                Activity(id=201, lead_id=2, date=date(2023, 9, 10), type=ActivityType.MEETING,
                         description="Initial consultation"),
            ],
        ),
        Lead(id=3, name="Michael Brown", email="michael@example.com", budget=120000, source="LinkedIn",
             score=78, status=LeadStatus.QUALIFIED, company="Globex", last_contact=date(2023, 9, 5)),
        Lead(id=4, name="Sarah Williams", email="sarah@example.com", budget=85000, source="Email Campaign",
             score=65, status=LeadStatus.NEW, company="Initech", last_contact=date(2023, 9, 20)),
        Lead(id=5, name="David Miller", email="david@example.com", budget=190000, source="Trade Show",
             score=73, status=LeadStatus.DISQUALIFIED, company="Wayne Enterprises",
             last_contact=date(2023, 8, 30)),
        Lead(id=6, name="Jessica Wilson", email="jessica@example.com", budget=175000, source="Website",
             score=81, status=LeadStatus.CONTACTED, company="Stark Industries",
             last_contact=date(2023, 9, 12)),
        Lead(id=7, name="Robert Taylor", email="robert@example.com", budget=95000, source="Advertisement",
             score=69, status=LeadStatus.NEW, company="Umbrella Corp", last_contact=date(2023, 9, 18)),
        Lead(id=8, name="Jennifer Garcia", email="jennifer@example.com", budget=230000, source="Webinar",
             score=88, status=LeadStatus.QUALIFIED, company="Massive Dynamics",
             last_contact=date(2023, 9, 3)),
    ]
