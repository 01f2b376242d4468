"""Initial catalog content inserted by ``Database.init_db``."""

DEFAULT_CATEGORIES = (
    "Relaxation",
    "Beauty",
    "Aesthetics",
    "Hairtreatment",
    "Photography",
    "Rejuvenate",
)

# Only inserted when SEED_DEMO_SERVICES is enabled.  Prices are in cents.
DEMO_SERVICES = (
    {"category": "Relaxation", "name": "Foot Reflexology - 45min", "performer": "Jessa", "duration": 45, "price": 6000},
    {"category": "Relaxation", "name": "Hand Reflexology - 45min", "performer": "Jessa", "duration": 45, "price": 6000},
    {"category": "Relaxation", "name": "Head-to-Toe Relaxation Package - 45min", "performer": "Jessa", "duration": 45, "price": 7000},
    {"category": "Relaxation", "name": "Scalp & Shoulder Massage - 45min", "performer": "Jessa", "duration": 45, "price": 5000},
    {"category": "Beauty", "name": "Special Event Makeover", "performer": "Trechan", "duration": 90, "price": 10000},
    {"category": "Beauty", "name": "Brow Lamination - 60min", "performer": "Maricel", "duration": 60, "price": 8000},
    {"category": "Beauty", "name": "Lash Extensions - Classic - 120min", "performer": "Maricel", "duration": 120, "price": 12000},
    {"category": "Beauty", "name": "Lash Lift and Tint - 60min", "performer": "Maricel", "duration": 60, "price": 7500},
    {"category": "Aesthetics", "name": "Manicure - 60min", "performer": "Trechan", "duration": 60, "price": 6000},
    {"category": "Aesthetics", "name": "Pedicure - 60min", "performer": "Trechan", "duration": 60, "price": 6500},
    {"category": "Aesthetics", "name": "Mani-Pedi - 120min", "performer": "Trechan", "duration": 120, "price": 12000},
    {"category": "Hairtreatment", "name": "Hair Wash & Style - 90min", "performer": "Maricel", "duration": 90, "price": 9000},
    {"category": "Hairtreatment", "name": "Hair Lamination - 120min", "performer": "Maricel", "duration": 120, "price": 15000},
    {"category": "Photography", "name": "Solo Portrait Session - 30min", "performer": "Jessa", "duration": 30, "price": 7000},
    {"category": "Photography", "name": "Group Portrait Session - 60min", "performer": "Jessa", "duration": 60, "price": 12000},
    {"category": "Rejuvenate", "name": "Ayurvedic Scalp Massage / Swedish Combo - 120min", "performer": "Mary-Ann", "duration": 120, "price": 14000},
    {"category": "Rejuvenate", "name": "Hot Stones Aromatherapy Massage - 120min", "performer": "Mary-Ann", "duration": 120, "price": 15000},
)
