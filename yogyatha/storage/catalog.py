"""Default scheme catalog, written to the store the first time it is read."""

from __future__ import annotations

from yogyatha.eligibility.regions import PAN_INDIA
from yogyatha.models.enums import Category, Gender, Language, Role
from yogyatha.schemas.eligibility import EligibilityRules, Scheme

EN, HI, TE = Language.EN, Language.HI, Language.TE
ALL_CATEGORIES = list(Category)

DEFAULT_SCHEMES: list[Scheme] = [
    Scheme(
        id="pm-kisan",
        icon="leaf",
        name={EN: "PM-KISAN Samman Nidhi", HI: "पीएम-किसान सम्मान निधि", TE: "పీఎం-కిసాన్ సమ్మాన్ నిధి"},
        description={EN: "Income support of Rs 6,000 per year to landholding farmer families."},
        eligibility=EligibilityRules(
            min_age=18,
            max_age=100,
            max_income=1_000_000,
            states=[PAN_INDIA],
            categories=ALL_CATEGORIES,
            roles=[Role.FARMER],
        ),
        benefits={EN: ["Rs 6,000 per year in three instalments", "Direct benefit transfer to bank account"]},
        documents={EN: ["Aadhaar Card", "Land documents", "Bank Account Details"]},
        apply_link="https://pmkisan.gov.in/",
    ),
    Scheme(
        id="pm-mudra",
        icon="light-bulb",
        name={EN: "Pradhan Mantri MUDRA Yojana", HI: "प्रधानमंत्री मुद्रा योजना"},
        description={EN: "Collateral-free loans up to Rs 10 lakh for micro enterprises."},
        eligibility=EligibilityRules(
            min_age=18,
            max_age=65,
            max_income=2_500_000,
            states=[PAN_INDIA],
            categories=ALL_CATEGORIES,
            roles=[Role.ENTREPRENEUR, Role.JOB_SEEKER],
        ),
        benefits={EN: ["Shishu, Kishore and Tarun loan categories", "No collateral required"]},
        documents={EN: ["Aadhaar Card", "PAN Card", "Business Plan", "Proof of Residence"]},
        apply_link="https://www.mudra.org.in/",
    ),
    Scheme(
        id="post-matric-scholarship-sc",
        icon="academic-cap",
        name={EN: "Post Matric Scholarship for SC Students", HI: "अनुसूचित जाति छात्रों के लिए पोस्ट मैट्रिक छात्रवृत्ति"},
        description={EN: "Financial assistance for SC students studying beyond class 10."},
        eligibility=EligibilityRules(
            min_age=15,
            max_age=35,
            max_income=250_000,
            states=[PAN_INDIA],
            categories=[Category.SC],
            roles=[Role.STUDENT],
        ),
        benefits={EN: ["Tuition fee reimbursement", "Monthly maintenance allowance"]},
        documents={EN: ["Aadhaar Card", "Caste Certificate", "Income Certificate", "Bonafide Certificate"]},
        apply_link="https://scholarships.gov.in/",
    ),
    Scheme(
        id="ts-kalyana-lakshmi",
        icon="heart",
        name={EN: "Kalyana Lakshmi", TE: "కళ్యాణ లక్ష్మి"},
        description={EN: "One-time assistance of Rs 1,00,116 for the marriage of girls from low-income families."},
        eligibility=EligibilityRules(
            min_age=18,
            max_age=40,
            max_income=200_000,
            states=["Telangana"],
            categories=[Category.SC, Category.ST, Category.OBC, Category.EWS],
            roles=[Role.CITIZEN],
            genders=[Gender.FEMALE],
        ),
        benefits={EN: ["Rs 1,00,116 one-time grant"]},
        documents={EN: ["Aadhaar Card", "Income Certificate", "Caste Certificate", "Bonafide Certificate"]},
        apply_link="https://telanganaepass.cgg.gov.in/",
    ),
    Scheme(
        id="wb-kanyashree",
        icon="academic-cap",
        name={EN: "Kanyashree Prakalpa", HI: "कन्याश्री प्रकल्प"},
        description={EN: "Annual and one-time grants to keep girls in school and delay marriage."},
        eligibility=EligibilityRules(
            min_age=13,
            max_age=19,
            max_income=120_000,
            states=["West Bengal"],
            categories=ALL_CATEGORIES,
            roles=[Role.STUDENT],
            genders=[Gender.FEMALE],
        ),
        benefits={EN: ["Rs 1,000 annual scholarship", "Rs 25,000 one-time grant at 18"]},
        documents={EN: ["Birth certificate of girl child", "Unmarried Status Declaration", "Proof of School Enrollment"]},
        apply_link="https://wbkanyashree.gov.in/",
    ),
    Scheme(
        id="ab-pmjay",
        icon="shield-check",
        name={EN: "Ayushman Bharat PM-JAY", HI: "आयुष्मान भारत पीएम-जेएवाई"},
        description={EN: "Health cover of Rs 5 lakh per family per year for secondary and tertiary care."},
        eligibility=EligibilityRules(
            min_age=0,
            max_age=120,
            max_income=300_000,
            states=[PAN_INDIA],
            categories=ALL_CATEGORIES,
            roles=list(Role),
        ),
        benefits={EN: ["Cashless treatment at empanelled hospitals", "Rs 5 lakh cover per family"]},
        documents={EN: ["Aadhaar Card", "Ration Card"]},
        apply_link="https://pmjay.gov.in/",
    ),
    Scheme(
        id="up-yuva-udyami",
        icon="briefcase",
        name={EN: "Mukhyamantri Yuva Udyami Yojana", HI: "मुख्यमंत्री युवा उद्यमी योजना"},
        description={EN: "Interest-free loans for young entrepreneurs in Uttar Pradesh."},
        eligibility=EligibilityRules(
            min_age=21,
            max_age=40,
            max_income=800_000,
            states=["Uttar Pradesh"],
            categories=ALL_CATEGORIES,
            roles=[Role.ENTREPRENEUR, Role.JOB_SEEKER],
        ),
        benefits={EN: ["Interest-free loan up to Rs 5 lakh", "Margin money subsidy"]},
        documents={EN: ["Domicile Certificate of UP", "Project Report", "Educational Qualification Certificate"]},
        apply_link="https://msme.up.gov.in/",
    ),
]
