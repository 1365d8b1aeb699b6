"""
Itinerary suggestion service.

Builds itinerary suggestions from fixed lookup tables. Two generators exist:

1. Rule-based: one line per trip day, fully deterministic. Each line combines
   the destination for that day (cycling through the trip's destinations),
   an activity for the season and one for the trip type, plus an evening
   activity, each picked by ``day_index % len(table)``.
2. Template: a markdown itinerary whose morning, afternoon, evening and
   special activities are picked at random per day from arrays keyed by
   destination type (city, beach, mountain, cultural).

Nothing here calls an external model; "AI" suggestions are template selection.
"""
import random
import re
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple
from app.core.config import settings

FALLBACK_DESTINATION = "Local highlights"

# Month -> season bucket
SEASON_BY_MONTH = {
    12: "winter", 1: "winter", 2: "winter",
    3: "spring", 4: "spring", 5: "spring",
    6: "summer", 7: "summer", 8: "summer",
    9: "fall", 10: "fall", 11: "fall",
}

SEASON_ACTIVITIES = {
    "winter": [
        "warm up in a cozy café",
        "browse an indoor market",
        "see the seasonal lights after dark",
        "spend the afternoon in a museum",
    ],
    "spring": [
        "walk through the parks in bloom",
        "visit an open-air market",
        "take a morning bike ride",
        "have lunch on a garden terrace",
    ],
    "summer": [
        "start early to beat the heat",
        "cool off at a lake or beach",
        "join an open-air festival",
        "picnic in a shady park",
    ],
    "fall": [
        "take a scenic walk among autumn colors",
        "visit a harvest market",
        "try seasonal dishes at a local bistro",
        "explore a quiet old town",
    ],
}

# Free-text trip type -> type bucket
TRIP_TYPE_BUCKETS = {
    "adventure": "adventure",
    "hiking": "adventure",
    "outdoor": "adventure",
    "outdoors": "adventure",
    "relaxation": "relaxation",
    "relax": "relaxation",
    "beach": "relaxation",
    "spa": "relaxation",
    "cultural": "cultural",
    "culture": "cultural",
    "history": "cultural",
    "museum": "cultural",
    "museums": "cultural",
    "family": "family",
    "kids": "family",
    "romantic": "romantic",
    "honeymoon": "romantic",
    "food": "food",
    "culinary": "food",
    "foodie": "food",
    "business": "business",
    "work": "business",
}

TYPE_ACTIVITIES = {
    "adventure": [
        "hike a trail outside the center",
        "rent kayaks or bikes",
        "book a guided outdoor excursion",
        "climb to the best viewpoint",
    ],
    "relaxation": [
        "slow down at a spa or pool",
        "read by the water",
        "book a massage",
        "linger over a long lunch",
    ],
    "cultural": [
        "tour the main historic sites",
        "visit a local gallery",
        "join a guided heritage walk",
        "catch a traditional performance",
    ],
    "family": [
        "visit a family-friendly attraction",
        "stop at a playground or zoo",
        "try a hands-on workshop together",
        "take an easy boat ride",
    ],
    "romantic": [
        "find a quiet spot for sunset",
        "stroll through the old quarter",
        "book a tasting for two",
        "take a scenic evening cruise",
    ],
    "food": [
        "join a street food tour",
        "take a cooking class",
        "shop the central food market",
        "try the regional specialty",
    ],
    "business": [
        "schedule meetings near the hotel",
        "find a good coworking café",
        "keep the afternoon for work",
        "network over an early dinner",
    ],
    "general": [
        "see the main sights",
        "explore a new neighborhood",
        "try a recommended local restaurant",
        "leave time to wander",
    ],
}

EVENING_ACTIVITIES = [
    "dinner at a local favorite",
    "an evening walk",
    "drinks with a view",
    "a night market visit",
    "an early night to rest",
]

# Ordered: the first matching keyword group wins
DESTINATION_TYPE_KEYWORDS = [
    ("beach", ("beach", "coast", "island")),
    ("mountain", ("mountain", "alps", "peak")),
    ("cultural", ("temple", "ancient", "historic")),
]

# Destination type -> trip type bucket it hints at
DESTINATION_TYPE_BUCKETS = {
    "beach": "relaxation",
    "mountain": "adventure",
    "cultural": "cultural",
}

DESTINATION_ACTIVITIES = {
    "city": {
        "morning": [
            "Breakfast at a local café or bakery",
            "Visit the main square or downtown area",
            "Explore the historic district",
            "Take a morning walking tour",
        ],
        "afternoon": [
            "Visit museums and cultural sites",
            "Shop at local markets or boutiques",
            "Try local cuisine at popular restaurants",
            "Explore parks and public spaces",
        ],
        "evening": [
            "Dinner at a recommended local restaurant",
            "Attend cultural events or performances",
            "Explore the nightlife scene",
            "Take evening photos of landmarks",
        ],
    },
    "beach": {
        "morning": [
            "Sunrise beach walk",
            "Breakfast with ocean views",
            "Morning swim or water activities",
            "Beach yoga or meditation",
        ],
        "afternoon": [
            "Beach relaxation and sunbathing",
            "Water sports (snorkeling, kayaking)",
            "Beachside lunch",
            "Explore coastal trails",
        ],
        "evening": [
            "Sunset viewing",
            "Beachside dinner",
            "Stargazing on the beach",
            "Evening beach bonfire (if available)",
        ],
    },
    "mountain": {
        "morning": [
            "Early morning hike",
            "Breakfast with mountain views",
            "Wildlife watching",
            "Photography of scenic landscapes",
        ],
        "afternoon": [
            "Mountain biking or hiking",
            "Visit mountain villages",
            "Local mountain cuisine",
            "Adventure activities",
        ],
        "evening": [
            "Mountain sunset viewing",
            "Cozy mountain lodge dinner",
            "Stargazing in clear mountain air",
            "Relaxation by the fireplace",
        ],
    },
    "cultural": {
        "morning": [
            "Visit historical sites and monuments",
            "Guided cultural tour",
            "Traditional breakfast experience",
            "Explore ancient architecture",
        ],
        "afternoon": [
            "Museum visits",
            "Cultural workshops or classes",
            "Traditional lunch experience",
            "Local artisan visits",
        ],
        "evening": [
            "Traditional dinner experience",
            "Cultural performances",
            "Local storytelling sessions",
            "Evening cultural walks",
        ],
    },
}

SPECIAL_ACTIVITIES = {
    "city": [
        "Take a guided walking tour of historic sites",
        "Visit the top-rated museums and galleries",
        "Experience the local food scene with a food tour",
        "Attend a local festival or event",
        "Explore hidden neighborhoods and local spots",
        "Take a photography tour of iconic landmarks",
    ],
    "beach": [
        "Go snorkeling or scuba diving",
        "Take a boat tour or fishing trip",
        "Try water sports like surfing or paddleboarding",
        "Visit nearby islands or coastal attractions",
        "Experience local beach culture and traditions",
        "Take a sunset cruise",
    ],
    "mountain": [
        "Go on a guided mountain trek",
        "Try rock climbing or rappelling",
        "Visit mountain villages and meet locals",
        "Experience local mountain cuisine",
        "Take a scenic cable car or gondola ride",
        "Go wildlife spotting with a guide",
    ],
    "cultural": [
        "Participate in traditional ceremonies",
        "Learn local crafts or skills",
        "Attend cultural workshops",
        "Visit sacred sites and temples",
        "Experience traditional music and dance",
        "Learn about local history and legends",
    ],
}

TRAVEL_TIPS = [
    "**Packing:** Pack according to the weather and activities planned",
    "**Transportation:** Research local transportation options",
    "**Budget:** Set aside extra funds for unexpected expenses",
    "**Safety:** Keep important documents and emergency contacts handy",
    "**Flexibility:** Be open to changing plans based on local recommendations",
]

TIP_MARKERS = ("**Packing:**", "**Transportation:**", "**Budget:**", "**Safety:**", "**Flexibility:**")

TYPE_SUGGESTIONS = {
    "adventure": [
        "Book guided excursions ahead of time",
        "Pack sturdy shoes and layers",
        "Check trail and weather conditions daily",
    ],
    "relaxation": [
        "Keep mornings unscheduled",
        "Reserve spa treatments early",
        "Pick accommodation close to the water",
    ],
    "cultural": [
        "Buy museum passes in advance",
        "Look up opening days of major sites",
        "Learn a few phrases in the local language",
    ],
    "family": [
        "Plan one main activity per day",
        "Schedule breaks for meals and naps",
        "Look for family tickets and discounts",
    ],
    "romantic": [
        "Reserve a special dinner in advance",
        "Plan a sunset activity",
        "Leave room for spontaneous moments",
    ],
    "food": [
        "Reserve popular restaurants early",
        "Visit markets in the morning",
        "Ask locals for their favorite spots",
    ],
    "business": [
        "Stay close to your meeting venues",
        "Confirm reliable internet access",
        "Block time for rest between meetings",
    ],
    "general": [
        "Mix planned sights with free time",
        "Check local holidays and opening hours",
        "Keep a copy of your travel documents",
    ],
}

SEASON_PACKING = {
    "winter": ["Warm coat and thermal layers", "Gloves, hat and scarf", "Waterproof boots"],
    "spring": ["Light jacket for cool mornings", "Compact umbrella", "Comfortable walking shoes"],
    "summer": ["Sunscreen and sunglasses", "Breathable clothing", "Refillable water bottle"],
    "fall": ["Layers for changing temperatures", "Rain jacket", "Closed-toe shoes"],
}

DESTINATION_PACKING = {
    "city": ["Day bag for sightseeing", "Transit card or app"],
    "beach": ["Swimwear and beach towel", "Reef-safe sunscreen"],
    "mountain": ["Hiking boots", "First-aid kit"],
    "cultural": ["Modest clothing for sacred sites", "Guidebook or audio guide"],
}

DAY_LINE_PATTERN = re.compile(r"^Day (\d+): (.+)$")
DAY_HEADER_PATTERN = re.compile(r"^#{2,3} (Day \d+:?.*)$", re.IGNORECASE)


def parse_iso_date(value: str) -> date:
    """Parse the date part of an ISO date or datetime string."""
    return date.fromisoformat((value or "").strip()[:10])


def count_trip_days(start_date: str, end_date: str) -> int:
    """Inclusive number of days between two ISO dates. May be zero or negative."""
    return (parse_iso_date(end_date) - parse_iso_date(start_date)).days + 1


def season_for_month(month: int) -> str:
    return SEASON_BY_MONTH[month]


def type_bucket(trip_type: Optional[str]) -> str:
    """Map a free-text trip type to a bucket, defaulting to "general"."""
    if not trip_type:
        return "general"
    normalized = trip_type.strip().lower()
    if normalized in TRIP_TYPE_BUCKETS:
        return TRIP_TYPE_BUCKETS[normalized]
    for word in re.findall(r"[a-z]+", normalized):
        if word in TRIP_TYPE_BUCKETS:
            return TRIP_TYPE_BUCKETS[word]
    return "general"


def classify_destination(location: str) -> str:
    """Classify a destination by substring matching on its location."""
    location = (location or "").lower()
    for destination_type, keywords in DESTINATION_TYPE_KEYWORDS:
        if any(keyword in location for keyword in keywords):
            return destination_type
    return "city"


def rule_based_itinerary(trip, destinations: Sequence, trip_type: Optional[str] = None) -> List[str]:
    """
    Build one suggestion line per trip day, capped at ITINERARY_MAX_DAYS.

    The same trip, destination order and type always produce the same lines.
    The season comes from the start month for every day. When no type is
    given the trip's keywords are used to pick the bucket.
    """
    start = parse_iso_date(trip.start_date)
    day_count = min(count_trip_days(trip.start_date, trip.end_date), settings.ITINERARY_MAX_DAYS)
    bucket = type_bucket(trip_type if trip_type else trip.keywords)
    type_activities = TYPE_ACTIVITIES[bucket]
    season_activities = SEASON_ACTIVITIES[season_for_month(start.month)]

    lines = []
    for i in range(max(day_count, 0)):
        if destinations:
            where = destinations[i % len(destinations)].name
        else:
            where = FALLBACK_DESTINATION
        lines.append(
            f"Day {i + 1}: {where} - "
            f"{season_activities[i % len(season_activities)]}, "
            f"{type_activities[i % len(type_activities)]}, "
            f"then {EVENING_ACTIVITIES[i % len(EVENING_ACTIVITIES)]}."
        )
    return lines


def _format_long_date(value: date) -> str:
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def template_itinerary(trip, destinations: Sequence, rng: Optional[random.Random] = None) -> str:
    """Build a markdown itinerary with randomly chosen activities per day."""
    rng = rng or random.Random()
    start = parse_iso_date(trip.start_date)
    day_count = count_trip_days(trip.start_date, trip.end_date)
    max_days = settings.ITINERARY_MAX_DAYS

    parts = [f"# {trip.name} - Suggested Itinerary\n\n"]
    parts.append(f"**Trip Duration:** {day_count} days\n")
    parts.append(f"**Start Date:** {trip.start_date}\n")
    parts.append(f"**End Date:** {trip.end_date}\n\n")
    if trip.description:
        parts.append(f"**Trip Description:** {trip.description}\n\n")

    if destinations:
        parts.append("## Destinations\n\n")
        for index, dest in enumerate(destinations, start=1):
            parts.append(f"{index}. **{dest.name}** ({dest.location})\n")
            parts.append(f"   - Arrival: {dest.arrival_date}\n")
            parts.append(f"   - Departure: {dest.departure_date}\n\n")

    parts.append("## Day-by-Day Itinerary\n\n")
    for day in range(1, min(day_count, max_days) + 1):
        current = start + timedelta(days=day - 1)
        parts.append(f"### Day {day}: {_format_long_date(current)}\n\n")

        destination = None
        destination_type = "city"
        if destinations:
            # Stay at the last destination once the list runs out
            destination = destinations[min(day - 1, len(destinations) - 1)]
            destination_type = classify_destination(destination.location)

        activities = DESTINATION_ACTIVITIES[destination_type]
        for slot, label in (("morning", "Morning"), ("afternoon", "Afternoon"), ("evening", "Evening")):
            parts.append(f"**{label}:**\n")
            parts.append(f"- {rng.choice(activities[slot])}\n\n")
        parts.append("**Special Experience:**\n")
        parts.append(f"- {rng.choice(SPECIAL_ACTIVITIES[destination_type])}\n\n")

        if destination is not None:
            parts.append(f"**{destination.name} Highlights:**\n")
            parts.append(f"- Explore the unique culture of {destination.location}\n")
            parts.append("- Discover local hidden gems and authentic experiences\n")
            parts.append("- Immerse yourself in the local atmosphere and traditions\n\n")

    if day_count > max_days:
        parts.append("### Remaining Days\n\n")
        parts.append(f"For the remaining {day_count - max_days} days, consider:\n")
        parts.append("- Taking day trips to nearby attractions\n")
        parts.append("- Relaxing and enjoying the local pace of life\n")
        parts.append("- Exploring off-the-beaten-path locations\n")
        parts.append("- Trying new activities and experiences\n\n")

    parts.append("## Travel Tips\n\n")
    for tip in TRAVEL_TIPS:
        parts.append(f"- {tip}\n")
    parts.append("\n*This itinerary is a starting point. Feel free to customize it based on "
                 "your interests and local recommendations!*")
    return "".join(parts)


def detect_trip_type(trip, destinations: Sequence) -> Dict:
    """Guess the trip type by counting bucket keywords in the trip's text."""
    text_parts = [trip.name, trip.description or "", trip.keywords or ""]
    for dest in destinations:
        text_parts.extend([dest.name, dest.location])
    words = re.findall(r"[a-z]+", " ".join(text_parts).lower())

    hits: Dict[str, int] = {}
    for word in words:
        bucket = TRIP_TYPE_BUCKETS.get(word)
        if bucket:
            hits[bucket] = hits.get(bucket, 0) + 1
    for dest in destinations:
        bucket = DESTINATION_TYPE_BUCKETS.get(classify_destination(dest.location))
        if bucket:
            hits[bucket] = hits.get(bucket, 0) + 1

    if not hits:
        return {"type": "general", "confidence": 30, "suggestions": list(TYPE_SUGGESTIONS["general"])}

    # Ties go to the bucket listed first in TYPE_ACTIVITIES
    order = list(TYPE_ACTIVITIES)
    best = max(hits, key=lambda bucket: (hits[bucket], -order.index(bucket)))
    confidence = min(95, 50 + 15 * hits[best])
    return {"type": best, "confidence": confidence, "suggestions": list(TYPE_SUGGESTIONS[best])}


def weather_suggestions(location: str, when: str) -> Tuple[str, List[str]]:
    """Packing suggestions for a location on a date. Returns (season, suggestions)."""
    season = season_for_month(parse_iso_date(when).month)
    suggestions = SEASON_PACKING[season] + DESTINATION_PACKING[classify_destination(location)]
    return season, suggestions


def trip_summary(trip, destinations: Sequence, items: Sequence, expenses: Sequence) -> str:
    """Markdown overview of a trip and its planned content."""
    lines = [f"# {trip.name}", ""]
    try:
        lines.append(f"**Dates:** {trip.start_date} to {trip.end_date} "
                     f"({count_trip_days(trip.start_date, trip.end_date)} days)")
    except ValueError:
        lines.append(f"**Dates:** {trip.start_date} to {trip.end_date}")
    if trip.description:
        lines.append(f"**About:** {trip.description}")
    lines.append("")

    if destinations:
        lines.append(f"## Destinations ({len(destinations)})")
        for dest in destinations:
            lines.append(f"- {dest.name} ({dest.location}), {dest.arrival_date} to {dest.departure_date}")
    else:
        lines.append("## Destinations")
        lines.append("- No destinations added yet")
    lines.append("")

    lines.append(f"## Itinerary ({len(items)} items)")
    by_date: Dict[str, int] = {}
    for item in items:
        by_date[item.date] = by_date.get(item.date, 0) + 1
    for item_date in sorted(by_date):
        lines.append(f"- {item_date or 'Unscheduled'}: {by_date[item_date]} planned")
    lines.append("")

    total = sum(expense.amount for expense in expenses)
    lines.append("## Expenses")
    lines.append(f"- {len(expenses)} expenses, {total:.2f} in total")
    return "\n".join(lines)


def parse_suggestions(text: str) -> Tuple[List[Tuple[str, str]], List[str]]:
    """
    Split generated itinerary text into item drafts and travel tips.

    Rule-based lines ("Day 3: ...") become one draft each. In markdown output,
    bullets under a "Day N" header become drafts titled by that header, and
    bullets carrying a travel-tip marker are collected as tips. Bullets under
    any other header are ignored.

    Returns:
        (drafts, tips) where drafts are (title, description) pairs
    """
    drafts: List[Tuple[str, str]] = []
    tips: List[str] = []
    current_day = None
    for raw_line in text.splitlines():
        line = raw_line.strip()
        match = DAY_LINE_PATTERN.match(line)
        if match:
            drafts.append((f"Day {match.group(1)}", match.group(2)))
            continue
        if line.startswith("#"):
            header = DAY_HEADER_PATTERN.match(line)
            current_day = header.group(1).strip() if header else None
            continue
        if not line.startswith("- "):
            continue
        bullet = line[2:].strip()
        if any(marker in bullet for marker in TIP_MARKERS):
            tips.append(bullet)
        elif current_day:
            drafts.append((current_day, bullet))
    return drafts, tips
