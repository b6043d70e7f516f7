"""
Starter catalogue loaded by ``zencure seed``.

Remedies point at their evidence through ``source_urls``; the seed command
resolves those to source ids once the sources exist.
"""

from datetime import datetime, timezone


def _date(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


SOURCES = [
    {
        "title": "Ginger for treating nausea and vomiting: an overview of systematic reviews",
        "url": "https://pubmed.ncbi.nlm.nih.gov/38072785/",
        "credibility_score": 9,
        "publication_date": _date(2023, 1, 1),
        "authors": ["Dabaghzadeh F", "Khalili H", "Dashti-Khavidaki S"],
        "publisher": "Curr Clin Pharmacol",
        "is_peer_reviewed": True,
    },
    {
        "title": (
            "Chamomile for sleep quality and generalized anxiety disorder: "
            "a systematic review and meta-analysis"
        ),
        "url": "https://pubmed.ncbi.nlm.nih.gov/31006899/",
        "credibility_score": 8,
        "publication_date": _date(2019, 4, 1),
        "authors": ["Zick SM", "Wright BD", "Sen A", "Arnedt JT"],
        "publisher": "BMC Complement Altern Med",
        "is_peer_reviewed": True,
    },
    {
        "title": (
            "An umbrella meta-analysis of randomized clinical trials on curcumin "
            "and inflammatory biomarkers"
        ),
        "url": "https://pmc.ncbi.nlm.nih.gov/articles/PMC9870680/",
        "credibility_score": 9,
        "publication_date": _date(2022, 6, 15),
        "authors": ["Wang Y", "Li J", "Zhao C"],
        "publisher": "Nutrients (Basel)",
        "is_peer_reviewed": True,
    },
    {
        "title": "Effects of lavender on anxiety: a systematic review and meta-analysis",
        "url": "https://pubmed.ncbi.nlm.nih.gov/31655395/",
        "credibility_score": 8,
        "publication_date": _date(2018, 5, 1),
        "authors": ["Donelli D", "Antonelli M", "Bellinazzi C", "Gensini GF", "Firenzuoli F"],
        "publisher": "Phytomedicine",
        "is_peer_reviewed": True,
    },
    {
        "title": "Honey as a topical treatment for wounds",
        "url": "https://pubmed.ncbi.nlm.nih.gov/25742878/",
        "credibility_score": 8,
        "publication_date": _date(2015, 8, 15),
        "authors": ["Jull AB", "Walker N", "Deshpande S", "Parham AJ"],
        "publisher": "Cochrane Database Syst Rev",
        "is_peer_reviewed": True,
    },
    {
        "title": "Valerian for sleep: a systematic review and meta-analysis",
        "url": "https://pubmed.ncbi.nlm.nih.gov/17145239/",
        "credibility_score": 7,
        "publication_date": _date(2007, 6, 15),
        "authors": ["Wheatley D"],
        "publisher": "Sleep Med",
        "is_peer_reviewed": True,
    },
]

REMEDIES = [
    {
        "name": "Ginger Root",
        "description": (
            "Ginger supplementation has been shown to relieve nausea in pregnancy, "
            "chemotherapy and postoperative settings."
        ),
        "categories": ["Herb", "Root", "Anti-emetic"],
        "symptoms": [
            {"name": "Nausea", "relevance_score": 95},
            {"name": "Vomiting", "relevance_score": 85},
            {"name": "Motion Sickness", "relevance_score": 80},
        ],
        "warnings": [
            "May interact with anticoagulants",
            "High doses can cause gastrointestinal upset",
        ],
        "source_urls": ["https://pubmed.ncbi.nlm.nih.gov/38072785/"],
        "verified": True,
    },
    {
        "name": "Chamomile Tea",
        "description": (
            "Chamomile has demonstrated efficacy for improving sleep quality and "
            "mild generalized anxiety disorder symptoms."
        ),
        "categories": ["Herb", "Tea", "Relaxant"],
        "symptoms": [
            {"name": "Insomnia", "relevance_score": 90},
            {"name": "Anxiety", "relevance_score": 85},
        ],
        "warnings": ["Allergic reactions possible in ragweed-sensitive individuals"],
        "source_urls": ["https://pubmed.ncbi.nlm.nih.gov/31006899/"],
        "verified": True,
    },
    {
        "name": "Turmeric with Black Pepper",
        "description": (
            "Curcumin reduces inflammatory biomarkers (CRP, IL-6, TNF-alpha) in "
            "chronic inflammatory conditions."
        ),
        "categories": ["Spice", "Anti-inflammatory"],
        "symptoms": [
            {"name": "Inflammation", "relevance_score": 95},
            {"name": "Joint Pain", "relevance_score": 80},
        ],
        "warnings": [
            "May interact with blood thinners",
            "Poor bioavailability unless taken with piperine",
        ],
        "source_urls": ["https://pmc.ncbi.nlm.nih.gov/articles/PMC9870680/"],
        "verified": True,
    },
    {
        "name": "Lavender Essential Oil",
        "description": (
            "Lavender essential oil has anxiolytic effects when taken orally or "
            "used in aromatherapy."
        ),
        "categories": ["Essential Oil", "Aromatherapy"],
        "symptoms": [
            {"name": "Anxiety", "relevance_score": 90},
            {"name": "Stress", "relevance_score": 85},
        ],
        "warnings": [
            "Topical use may cause skin irritation",
            "Oral dosing requires standardized preparations",
        ],
        "source_urls": ["https://pubmed.ncbi.nlm.nih.gov/31655395/"],
        "verified": True,
    },
    {
        "name": "Honey",
        "description": "Medical-grade honey accelerates wound healing and reduces infection risk.",
        "categories": ["Natural Sweetener", "Wound Care"],
        "symptoms": [
            {"name": "Wound Healing", "relevance_score": 90},
            {"name": "Burn Care", "relevance_score": 85},
        ],
        "warnings": ["Not for infants under 1 year old", "Use medical-grade preparations only"],
        "source_urls": ["https://pubmed.ncbi.nlm.nih.gov/25742878/"],
        "verified": True,
    },
    {
        "name": "Valerian Root",
        "description": "Valerian may improve sleep onset and quality with minimal side effects.",
        "categories": ["Herb", "Sedative"],
        "symptoms": [
            {"name": "Insomnia", "relevance_score": 85},
            {"name": "Sleep Latency", "relevance_score": 75},
        ],
        "warnings": [
            "Not for long-term continuous use",
            "May cause morning grogginess in some",
        ],
        "source_urls": ["https://pubmed.ncbi.nlm.nih.gov/17145239/"],
        "verified": True,
    },
]
