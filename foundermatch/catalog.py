"""
Closed vocabularies for founder profiles.

Every enumerated profile field must hold one of these values. Validation
happens in schema.py before a profile is stored; the scoring engine never
checks membership.
"""

REMOTE_ONLY = "Remote only"

INDUSTRIES = [
    "Tech",
    "Healthcare",
    "Finance",
    "Education",
    "E-commerce",
    "Consumer Products",
    "Media & Entertainment",
    "Real Estate",
    "Energy & Sustainability",
    "Manufacturing",
    "Food & Beverage",
    "Transportation & Logistics",
    "Other",
]

FOUNDER_STATUSES = [
    "Technical",
    "Business",
    "Domain Expert",
    "Creative",
    "Operations",
]

COMMITMENT_LEVELS = [
    "Full-time",
    "Part-time",
    "Weekends only",
    "Flexible",
]

FINANCIAL_CONTRIBUTIONS = [
    "Will self-fund/bootstrap",
    "Can invest <$25K personally",
    "Can invest $25K-$100K personally",
    "Can invest >$100K personally",
    "No personal investment, seeking external funding",
    "Brings existing investor relationships",
    "Prefers not to discuss until later stage",
    "Seeking co-founder with investment capability",
    "Open to sweat equity arrangements",
]

PERSONALITY_TRAITS = [
    "Visionary",
    "Detail-oriented",
    "Risk-taker",
    "Analytical",
    "Creative",
    "Methodical",
    "Growth-oriented",
    "Process-driven",
    "People-focused",
    "Execution-focused",
    "Strategic thinker",
    "Tactical executor",
    "Persistent",
    "Adaptable",
    "Collaborative",
    "Independent",
]

SKILL_CATEGORIES = [
    "Engineering",
    "Product",
    "Design",
    "Marketing",
    "Sales",
    "Finance",
    "Operations",
    "Data Science",
    "Legal",
    "Fundraising",
    "Business Development",
    "Customer Success",
]

REGIONS = [
    "US - West Coast",
    "US - East Coast",
    "US - Midwest",
    "US - South",
    "Europe",
    "Asia",
    "Latin America",
    "Africa",
    "Australia/Oceania",
]

LOCATIONS = REGIONS + [REMOTE_ONLY]
