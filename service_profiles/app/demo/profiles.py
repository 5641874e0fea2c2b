"""
Deterministic demo profiles used as the search candidate pool.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from shared.logging import get_logger

NAMES = [
    "Emma Johnson", "Sofia Martinez", "Isabella Thompson", "Olivia Garcia", "Ava Rodriguez",
    "Mia Williams", "Amelia Brown", "Charlotte Davis", "Luna Miller", "Harper Wilson",
    "Evelyn Moore", "Abigail Taylor", "Emily Anderson", "Elizabeth Thomas", "Sofia Jackson",
    "Avery White", "Ella Harris", "Scarlett Martin", "Grace Lee", "Aria Clark",
]

CITIES = [
    "Stockholm", "Gothenburg", "Malmö", "Uppsala", "Västerås",
    "Örebro", "Linköping", "Helsingborg", "Jönköping", "Norrköping",
]

OCCUPATIONS = [
    "Software Engineer", "Designer", "Teacher", "Nurse", "Marketing Manager",
    "Data Scientist", "Photographer", "Architect", "Consultant", "Student",
]

BIOS = [
    "Love hiking and photography",
    "Yoga instructor & coffee enthusiast",
    "Chef who loves to cook for friends",
    "Adventure seeker and book lover",
    "Dog mom and travel addict",
    "Artist and music lover",
    "Fitness enthusiast and foodie",
    "Nature lover and weekend explorer",
    "Dancer and life enjoyer",
    "Entrepreneur with wanderlust",
]

INTERESTS = [
    ["Photography", "Hiking", "Travel"],
    ["Yoga", "Coffee", "Art"],
    ["Cooking", "Wine", "Music"],
    ["Reading", "Movies", "Adventure"],
    ["Dogs", "Travel", "Beaches"],
    ["Art", "Music", "Concerts"],
    ["Fitness", "Food", "Running"],
    ["Nature", "Camping", "Outdoors"],
    ["Dancing", "Parties", "Fun"],
    ["Business", "Travel", "Innovation"],
]

MIN_AGE = 22
AGE_SPREAD = 15
PHOTO_URL = "https://picsum.photos/400/600?random={seed}"


class DemoProfileSummary(BaseModel):
    """Profile card shown in listings and search results."""
    id: int
    name: str
    age: int
    city: str
    primary_photo_url: str = Field(serialization_alias="primaryPhotoUrl")
    bio: str
    occupation: str
    interests: List[str]
    is_verified: bool = Field(serialization_alias="isVerified")
    is_online: bool = Field(serialization_alias="isOnline")
    last_active_at: datetime = Field(serialization_alias="lastActiveAt")


class DemoProfileDetail(BaseModel):
    """Full profile view."""
    id: int
    name: str
    email: str
    bio: str
    age: int
    gender: str
    preferences: str = "Everyone"
    city: str
    state: str = "Stockholm County"
    country: str = "Sweden"
    photo_urls: List[str] = Field(serialization_alias="photoUrls")
    primary_photo_url: str = Field(serialization_alias="primaryPhotoUrl")
    occupation: str
    company: str
    education: str = "University Graduate"
    school: str = "Stockholm University"
    height: int
    smoking_status: str = Field("Non-smoker", serialization_alias="smokingStatus")
    drinking_status: str = Field("Social drinker", serialization_alias="drinkingStatus")
    wants_children: bool = Field(serialization_alias="wantsChildren")
    has_children: bool = Field(False, serialization_alias="hasChildren")
    relationship_type: str = Field("Long-term", serialization_alias="relationshipType")
    interests: List[str]
    languages: List[str]
    hobby_list: str = Field(serialization_alias="hobbyList")
    instagram_handle: str = Field(serialization_alias="instagramHandle")
    is_verified: bool = Field(serialization_alias="isVerified")
    is_phone_verified: bool = Field(True, serialization_alias="isPhoneVerified")
    is_email_verified: bool = Field(True, serialization_alias="isEmailVerified")
    is_photo_verified: bool = Field(serialization_alias="isPhotoVerified")
    is_premium: bool = Field(serialization_alias="isPremium")
    subscription_type: str = Field(serialization_alias="subscriptionType")
    created_at: datetime = Field(serialization_alias="createdAt")
    last_active_at: datetime = Field(serialization_alias="lastActiveAt")
    is_online: bool = Field(serialization_alias="isOnline")


class DemoProfileProvider:
    """Generate demo profiles from fixed tables.

    Output depends only on the index and the reference time returned by
    ``clock``, so two calls with the same clock value are identical.
    """

    def __init__(
        self,
        pool_size: int = 50,
        max_profiles: int = 100,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.pool_size = pool_size
        self.max_profiles = max_profiles
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.logger = get_logger("profiles.demo")

    def generate_profiles(self, count: int) -> List[DemoProfileSummary]:
        count = max(0, min(count, self.max_profiles))
        now = self.clock()
        profiles = [self._summary(index, now) for index in range(count)]
        self.logger.info("Generated demo profiles", count=len(profiles))
        return profiles

    def candidates(self) -> List[DemoProfileSummary]:
        """The search pool."""
        now = self.clock()
        return [self._summary(index, now) for index in range(self.pool_size)]

    def profile_detail(self, profile_id: int) -> DemoProfileDetail:
        now = self.clock()
        summary = self._summary(profile_id - 1, now)
        handle = summary.name.lower().replace(" ", "")

        return DemoProfileDetail(
            id=profile_id,
            name=summary.name,
            email=f"demo.user.{profile_id}@example.com",
            bio=summary.bio,
            age=summary.age,
            gender="Female" if profile_id % 2 == 0 else "Male",
            city=summary.city,
            photo_urls=[PHOTO_URL.format(seed=profile_id + offset) for offset in (0, 100, 200)],
            primary_photo_url=summary.primary_photo_url,
            occupation=summary.occupation,
            company=f"Demo Company {profile_id}",
            height=160 + (profile_id % 30),
            wants_children=profile_id % 3 == 0,
            interests=summary.interests,
            languages=["Swedish", "English"],
            hobby_list=", ".join(summary.interests),
            instagram_handle=f"@{handle}",
            is_verified=summary.is_verified,
            is_photo_verified=summary.is_verified,
            is_premium=profile_id % 5 == 0,
            subscription_type="Premium" if profile_id % 5 == 0 else "Free",
            created_at=now - timedelta(days=1 + (profile_id * 7) % 364),
            last_active_at=summary.last_active_at,
            is_online=summary.is_online,
        )

    def _summary(self, index: int, now: datetime) -> DemoProfileSummary:
        return DemoProfileSummary(
            id=index + 1,
            name=NAMES[index % len(NAMES)],
            age=MIN_AGE + (index % AGE_SPREAD),
            city=CITIES[index % len(CITIES)],
            primary_photo_url=PHOTO_URL.format(seed=index + 1),
            bio=BIOS[index % len(BIOS)],
            occupation=OCCUPATIONS[index % len(OCCUPATIONS)],
            interests=list(INTERESTS[index % len(INTERESTS)]),
            is_verified=index % 3 == 0,
            is_online=index % 4 != 0,
            # Last active within the past 24 hours
            last_active_at=now - timedelta(minutes=(index * 97) % 1440),
        )
