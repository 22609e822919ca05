from __future__ import annotations

from typing import Any


def sample_scholarships() -> list[dict[str, Any]]:
    """Seed catalog used for demos and local runs, in catalog record shape."""

    return [
        {
            "id": "merit-engineering",
            "title": "Merit-Based Engineering Scholarship",
            "description": (
                "Scholarship for outstanding engineering students with excellent academic performance"
            ),
            "provider": "Tech Foundation India",
            "amount": "₹50,000 per year",
            "eligibilityCriteria": {
                "minCgpa": 8.5,
                "maxCgpa": 10,
                "requiredEducation": ["Undergraduate", "Postgraduate"],
                "requiredFields": ["Engineering", "Technology"],
                "maxFamilyIncome": 800000,
                "allowedGenders": ["All"],
                "allowedCategories": ["General", "OBC", "SC", "ST"],
                "minAge": 17,
                "maxAge": 25,
            },
            "applicationDeadline": "2024-12-31",
            "documentsRequired": ["Marksheet", "Income Certificate", "Caste Certificate"],
            "contactInfo": {
                "email": "scholarships@techfoundation.org",
                "phone": "+91-9876543210",
                "website": "www.techfoundation.org",
            },
            "isActive": True,
        },
        {
            "id": "women-in-stem",
            "title": "Women in STEM Scholarship",
            "description": (
                "Encouraging women to pursue careers in Science, Technology, Engineering, and Mathematics"
            ),
            "provider": "Women Empowerment Society",
            "amount": "₹75,000 per year",
            "eligibilityCriteria": {
                "minCgpa": 7.5,
                "maxCgpa": 10,
                "requiredEducation": ["Undergraduate", "Postgraduate"],
                "requiredFields": ["Engineering", "Science", "Mathematics", "Technology"],
                "maxFamilyIncome": 1000000,
                "allowedGenders": ["Female"],
                "allowedCategories": ["General", "OBC", "SC", "ST", "EWS"],
                "minAge": 18,
                "maxAge": 30,
            },
            "applicationDeadline": "2024-11-30",
            "documentsRequired": ["Marksheet", "Income Certificate", "Identity Proof"],
            "contactInfo": {
                "email": "apply@womenstem.org",
                "phone": "+91-9876543211",
                "website": "www.womenstem.org",
            },
            "isActive": True,
        },
        {
            "id": "need-based-general",
            "title": "Need-Based General Scholarship",
            "description": "Financial assistance for students from economically weaker sections",
            "provider": "Education Support Trust",
            "amount": "₹30,000 per year",
            "eligibilityCriteria": {
                "minCgpa": 6.0,
                "maxCgpa": 10,
                "requiredEducation": ["Undergraduate", "Postgraduate"],
                "requiredFields": [],
                "maxFamilyIncome": 300000,
                "allowedGenders": ["All"],
                "allowedCategories": ["SC", "ST", "OBC", "EWS"],
                "minAge": 17,
                "maxAge": 28,
            },
            "applicationDeadline": "2025-01-15",
            "documentsRequired": [
                "Marksheet",
                "Income Certificate",
                "Caste Certificate",
                "Bank Details",
            ],
            "contactInfo": {
                "email": "support@edutrust.org",
                "phone": "+91-9876543212",
                "website": "www.edutrust.org",
            },
            "isActive": True,
        },
        {
            "id": "pg-research",
            "title": "Post Graduate Research Scholarship",
            "description": "Support for postgraduate students pursuing research in any field",
            "provider": "Research Development Council",
            "amount": "₹1,00,000 per year",
            "eligibilityCriteria": {
                "minCgpa": 8.0,
                "maxCgpa": 10,
                "requiredEducation": ["Postgraduate", "PhD"],
                "requiredFields": [],
                "maxFamilyIncome": 1200000,
                "allowedGenders": ["All"],
                "allowedCategories": ["General", "OBC", "SC", "ST", "EWS"],
                "minAge": 21,
                "maxAge": 35,
            },
            "applicationDeadline": "2024-10-31",
            "documentsRequired": ["Degree Certificate", "Research Proposal", "Income Certificate"],
            "contactInfo": {
                "email": "research@rdc.gov.in",
                "phone": "+91-9876543213",
                "website": "www.rdc.gov.in",
            },
            "isActive": True,
        },
    ]
