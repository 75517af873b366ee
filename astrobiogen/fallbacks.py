# astrobiogen/fallbacks.py
# Fallback Provider: one deterministic substitute per data kind.
# Each function takes the same keyword params as its live counterpart and ignores the rest.

from __future__ import annotations

import time
import zlib
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from astrobiogen import catalog
from astrobiogen.models import (
    Apod,
    ChatReply,
    Explanation,
    GeneRecord,
    IssLocation,
    LaunchRecord,
    NasaImage,
    PlanetFacts,
    QuizQuestion,
    ResearchResult,
    SearchResult,
    SpaceWeatherEvent,
)

PLANETS = ("Mercury", "Venus", "Earth", "Mars", "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto")

# ==============================
# GeneLab
# ==============================

def genes(*, experiment_id: str, **_: Any) -> List[GeneRecord]:
    return [GeneRecord(**g) for g in catalog.GENE_SETS.get(experiment_id, [])]

# ==============================
# Space data
# ==============================

# Reference position over the Gulf of Guinea; timestamp is the time of the request.
ISS_REFERENCE = (0.0, 0.0)


def iss_location(*, now: Optional[float] = None, **_: Any) -> IssLocation:
    lat, lon = ISS_REFERENCE
    return IssLocation(
        timestamp=int(now if now is not None else time.time()),
        latitude=lat,
        longitude=lon,
        altitude=408,
        velocity=27600,
    )


_SPACE_WEATHER = [
    {
        "activityID": "CME-2025-06-28T12:24:00-001",
        "startTime": "2025-06-28T12:24:00Z",
        "sourceLocation": "N12E08",
        "note": "Fast CME with estimated speed of 1200 km/s. May impact Earth's magnetosphere within 48 hours.",
        "type": "CME",
        "link": "https://www.swpc.noaa.gov/",
    },
    {
        "activityID": "FLARE-2025-06-27T08:15:00-003",
        "startTime": "2025-06-27T08:15:00Z",
        "sourceLocation": "S05W12",
        "note": "X1.2 class solar flare from active region 13245. Radio blackout observed on sunlit side of Earth.",
        "type": "FLARE",
        "link": "https://www.swpc.noaa.gov/",
    },
    {
        "activityID": "CME-2025-06-25T22:30:00-002",
        "startTime": "2025-06-25T22:30:00Z",
        "sourceLocation": "N20W30",
        "note": "Slow CME with estimated speed of 450 km/s. Not expected to be geoeffective.",
        "type": "CME",
        "link": "https://www.swpc.noaa.gov/",
    },
]


def space_weather(**_: Any) -> List[SpaceWeatherEvent]:
    return [SpaceWeatherEvent(**e) for e in _SPACE_WEATHER]


_LAUNCHES = [
    {
        "name": "SpaceX Crew-12",
        "provider": "SpaceX",
        "vehicle": "Falcon 9",
        "pad": "LC-39A",
        "location": "Kennedy Space Center, Florida",
        "net": "2025-07-15T14:30:00Z",
        "status": "Go",
        "mission": "ISS Crew Rotation",
        "description": "Crew rotation mission to the International Space Station carrying 4 astronauts.",
    },
    {
        "name": "Artemis II",
        "provider": "NASA",
        "vehicle": "SLS Block 1",
        "pad": "LC-39B",
        "location": "Kennedy Space Center, Florida",
        "net": "2025-09-20T12:00:00Z",
        "status": "Go",
        "mission": "Lunar Flyby",
        "description": "First crewed mission of NASA's Artemis program, performing a lunar flyby with 4 astronauts.",
    },
    {
        "name": "Starship Flight 10",
        "provider": "SpaceX",
        "vehicle": "Starship",
        "pad": "Starbase",
        "location": "Boca Chica, Texas",
        "net": "2025-07-05T18:00:00Z",
        "status": "TBD",
        "mission": "Orbital Test Flight",
        "description": "Tenth test flight of the full Starship stack, aiming for orbital velocity and controlled reentry.",
    },
    {
        "name": "JUICE Extended Mission",
        "provider": "ESA",
        "vehicle": "Ariane 6",
        "pad": "ELA-4",
        "location": "Kourou, French Guiana",
        "net": "2025-08-12T10:15:00Z",
        "status": "Go",
        "mission": "Jupiter Icy Moons Explorer",
        "description": "Launch of additional instruments for the JUICE mission to study Jupiter's icy moons.",
    },
]


def upcoming_launches(**_: Any) -> List[LaunchRecord]:
    return [LaunchRecord(**l) for l in _LAUNCHES]

# ==============================
# Groq insights
# ==============================

def gene_explanation(*, experiment: Optional[Dict[str, Any]] = None, **_: Any) -> Explanation:
    exp = experiment if isinstance(experiment, dict) else {}
    return Explanation(explanation=(
        f"Analysis of gene expression changes in {exp.get('organism') or 'organisms'} under "
        f"{exp.get('condition') or 'space'} conditions reveals significant adaptations to the space environment. "
        "The pattern suggests cellular stress responses and metabolic adjustments that help the organism cope "
        "with microgravity and radiation."
    ))


def space_effects(*, experiment: Optional[Dict[str, Any]] = None, **_: Any) -> Explanation:
    exp = experiment if isinstance(experiment, dict) else {}
    return Explanation(explanation=(
        f"The space environment affects {exp.get('organism') or 'organisms'} through several key mechanisms. "
        "Microgravity alters fluid distribution, cellular architecture, and gene expression patterns. "
        "Space radiation can damage DNA and cellular components. Together, these factors create a unique stress "
        "environment that organisms must adapt to, leading to the observed changes in gene expression and "
        "cellular function."
    ))


PLANET_FACTS: Dict[str, List[str]] = {
    "Mercury": [
        "Mercury is the smallest planet in our solar system and the closest to the Sun.",
        "A day on Mercury (sunrise to sunrise) lasts 176 Earth days, while its year is only 88 Earth days.",
        "Mercury's surface resembles our Moon with craters and ancient lava flows.",
        "Despite being closest to the Sun, Mercury is not the hottest planet. Venus is hotter due to its thick atmosphere.",
        "Mercury has a thin atmosphere and experiences extreme temperature variations.",
    ],
    "Venus": [
        "Venus is the hottest planet in our solar system with a surface temperature of about 462°C (864°F).",
        "Venus rotates backwards compared to other planets, so on Venus, the Sun rises in the west and sets in the east.",
        "A day on Venus is longer than its year. It takes 243 Earth days to rotate once but only 225 Earth days to orbit the Sun.",
        "Venus has a thick atmosphere composed mainly of carbon dioxide, creating an intense greenhouse effect.",
        "Venus is often called Earth's sister planet because of their similar size and proximity in the solar system.",
    ],
    "Earth": [
        "Earth is the only planet known to harbor life and the only one with liquid water on its surface.",
        "Earth's atmosphere is composed primarily of nitrogen (78%) and oxygen (21%).",
        "About 71% of Earth's surface is covered with water, making it appear blue from space.",
        "Earth has a strong magnetic field that protects us from harmful solar radiation.",
        "Earth is the only planet not named after a god or goddess in Roman or Greek mythology.",
    ],
    "Mars": [
        "Mars is known as the 'Red Planet' due to iron oxide (rust) on its surface.",
        "Mars has the largest volcano in the solar system, Olympus Mons, which is about three times the height of Mount Everest.",
        "Mars has two small moons, Phobos and Deimos, which may be captured asteroids.",
        "Mars experiences seasons similar to Earth because of its similar axial tilt.",
        "Evidence suggests that Mars once had liquid water on its surface and could have supported life.",
    ],
    "Jupiter": [
        "Jupiter is the largest planet in our solar system, with a mass more than twice that of all other planets combined.",
        "Jupiter's Great Red Spot is a giant storm that has been raging for at least 400 years.",
        "Jupiter has at least 79 moons, including the four large Galilean moons discovered by Galileo Galilei.",
        "Jupiter is primarily composed of hydrogen and helium, similar to the composition of the Sun.",
        "Jupiter has the shortest day of all the planets, rotating once every 10 hours despite its enormous size.",
    ],
    "Saturn": [
        "Saturn is famous for its spectacular ring system, which is made mostly of ice particles with some rocky debris.",
        "Saturn has at least 82 moons, with Titan being the largest and the only moon in our solar system with a substantial atmosphere.",
        "Saturn is the least dense planet in our solar system. It would float if placed in water.",
        "Saturn's rings extend up to 282,000 km from the planet but are only about 10 meters thick.",
        "Saturn's hexagonal cloud pattern at its north pole is a unique feature not found on any other planet.",
    ],
    "Uranus": [
        "Uranus rotates on its side with an axial tilt of about 98 degrees, likely due to a massive collision in its past.",
        "Uranus is an ice giant composed primarily of water, methane, and ammonia ices.",
        "Uranus appears blue-green due to methane in its atmosphere, which absorbs red light and reflects blue light.",
        "Uranus has 13 known rings, which are much fainter than Saturn's.",
        "Uranus was the first planet discovered using a telescope, by William Herschel in 1781.",
    ],
    "Neptune": [
        "Neptune has the strongest winds in the solar system, reaching speeds of up to 2,100 km/h (1,300 mph).",
        "Neptune was mathematically predicted to exist before it was actually observed, based on irregularities in Uranus's orbit.",
        "Neptune has a Great Dark Spot, similar to Jupiter's Great Red Spot, which is a storm system in its atmosphere.",
        "Neptune's moon Triton orbits the planet backwards (retrograde) and is likely a captured dwarf planet from the Kuiper Belt.",
        "Neptune has only been visited by one spacecraft, Voyager 2, which flew by in 1989.",
    ],
    "Pluto": [
        "Pluto was reclassified from a planet to a dwarf planet in 2006 by the International Astronomical Union.",
        "Pluto has five known moons, with Charon being the largest and nearly half the size of Pluto itself.",
        "Pluto's orbit is highly elliptical and inclined, sometimes bringing it closer to the Sun than Neptune.",
        "Pluto has a heart-shaped region called Tombaugh Regio, named after its discoverer Clyde Tombaugh.",
        "NASA's New Horizons spacecraft provided the first close-up images of Pluto in 2015, revealing mountains and glaciers.",
    ],
}


def _canonical_planet(planet: Optional[str]) -> str:
    p = (planet or "").strip()
    return p[:1].upper() + p[1:].lower() if p else "Unknown"


def planet_facts(*, planet: str, **_: Any) -> PlanetFacts:
    name = _canonical_planet(planet)
    facts = PLANET_FACTS.get(name) or [
        f"{name} is one of the celestial bodies in our solar system.",
        f"Scientists continue to study {name} to learn more about its unique characteristics.",
        f"{name} has its own distinct features that make it different from other planets.",
        f"{name} follows its own orbit around the Sun.",
        f"{name} has been observed by astronomers for centuries.",
    ]
    return PlanetFacts(facts=list(facts))


_QUIZ = [
    {"question": "Which planet is closest to the Sun?", "options": ["Venus", "Mercury", "Earth", "Mars"], "correctAnswer": "Mercury"},
    {"question": "Which planet has the Great Red Spot?", "options": ["Mars", "Venus", "Jupiter", "Saturn"], "correctAnswer": "Jupiter"},
    {"question": "Which planet is known as the 'Red Planet'?", "options": ["Jupiter", "Venus", "Mercury", "Mars"], "correctAnswer": "Mars"},
    {"question": "Which planet has the most prominent ring system?", "options": ["Jupiter", "Uranus", "Neptune", "Saturn"], "correctAnswer": "Saturn"},
    {"question": "Which of these is classified as a dwarf planet?", "options": ["Neptune", "Mercury", "Pluto", "Venus"], "correctAnswer": "Pluto"},
]


def quiz(*, question_count: int = 5, **_: Any) -> List[QuizQuestion]:
    return [QuizQuestion(**q) for q in _QUIZ[: max(0, question_count)]]

# ==============================
# Tavily research
# ==============================

RESEARCH = {
    "answer": (
        "The gene expression changes observed in this space experiment have potential implications for several "
        "medical conditions on Earth. Changes in stress response genes may provide insights into aging and "
        "degenerative diseases. Altered metabolic pathways could inform research on metabolic disorders. Structural "
        "gene modifications might relate to osteoporosis and muscle atrophy conditions. These findings contribute to "
        "our understanding of fundamental biological processes that have direct relevance to human health and "
        "disease treatment strategies."
    ),
    "sources": [
        {
            "title": "Space Biology Research and Medical Applications",
            "url": "https://www.nasa.gov/hrp/research",
            "content": "NASA's Human Research Program investigates how spaceflight affects human biology to develop "
                       "countermeasures and technologies that protect astronauts during space exploration.",
        },
        {
            "title": "Translational Research in Space Biology",
            "url": "https://www.ncbi.nlm.nih.gov/pmc/articles/PMC6135244/",
            "content": "This review discusses how space biology research has contributed to advances in medical "
                       "treatments for conditions like osteoporosis, immune disorders, and aging-related diseases.",
        },
    ],
}


def research(**_: Any) -> ResearchResult:
    return ResearchResult.model_validate(RESEARCH)


_MUSCLE = {
    "answer": (
        "The genes identified in space muscle experiments have significant medical relevance on Earth. Genes like "
        "MYH7, ACTA1, FOXO1, TRIM63, and FBXO32 are key regulators in muscle development, maintenance, and atrophy. "
        "MYH7 mutations are associated with cardiomyopathies and heart failure. FOXO1, TRIM63, and FBXO32 are central "
        "to muscle wasting conditions including sarcopenia, cachexia, and disuse atrophy. Research on these genes in "
        "space has direct applications for treating muscle-wasting diseases, age-related sarcopenia, and cardiac "
        "conditions. The accelerated muscle loss in microgravity serves as a valuable model for studying these "
        "conditions, as astronauts experience in weeks what takes months or years on Earth."
    ),
    "sources": [
        {
            "title": "Muscle Atrophy in Space: Translational Applications for Earth-Based Medicine",
            "url": "https://www.ncbi.nlm.nih.gov/pmc/articles/PMC7346599/",
            "content": "This review examines how spaceflight-induced muscle atrophy research has contributed to "
                       "understanding muscle wasting diseases on Earth.",
        },
        {
            "title": "Countermeasures to Muscle Atrophy: From Space to Earth Applications",
            "url": "https://www.frontiersin.org/articles/10.3389/fphys.2020.00142/full",
            "content": "This paper explores how exercise protocols and pharmaceutical interventions developed to counter "
                       "muscle loss in astronauts can be applied to treat sarcopenia, cachexia, and disuse atrophy in "
                       "Earth-bound patients.",
        },
    ],
}

_PLANT = {
    "answer": (
        "Research on plant genes affected by spaceflight has several Earth applications. The stress response genes "
        "upregulated in space are the same genes activated during drought, salinity stress, and temperature extremes "
        "on Earth. This provides insights for developing more resilient crops for challenging environments. The "
        "altered expression of photosynthesis genes and cell wall modification genes in space is helping scientists "
        "understand fundamental aspects of plant growth regulation that could be applied to optimize crop yields. The "
        "gravitropism-related genes studied in space experiments have applications in controlling plant architecture "
        "for agricultural purposes."
    ),
    "sources": [
        {
            "title": "From Space to Farm: Applications of Plant Space Biology",
            "url": "https://academic.oup.com/jxb/article/72/8/2834/6146810",
            "content": "This review discusses how plant stress response genes studied in space experiments are informing "
                       "the development of drought-resistant and climate-resilient crops on Earth.",
        },
        {
            "title": "Gravitropism Research Using Space-Based Experiments",
            "url": "https://www.annualreviews.org/doi/10.1146/annurev-arplant-042817-040547",
            "content": "This paper examines how understanding gravitropism gene function in the absence of gravity is "
                       "providing new approaches to manipulate plant architecture and growth patterns for agricultural "
                       "applications.",
        },
    ],
}

_IMMUNE = {
    "answer": (
        "The immune system genes affected during spaceflight have significant medical relevance on Earth. The "
        "downregulation of T cell activation genes and pro-inflammatory cytokines observed in space parallels certain "
        "immunosuppressive conditions on Earth. Understanding these changes can inform treatments for autoimmune "
        "disorders where suppressing these pathways is beneficial. Conversely, the knowledge could help develop "
        "interventions for immunodeficiency conditions. The upregulation of stress response genes provides insights "
        "into cellular protection mechanisms that could be harnessed for treating conditions involving oxidative "
        "stress, such as neurodegenerative diseases and aging-related disorders."
    ),
    "sources": [
        {
            "title": "Space Immunology: Implications for Human Disease",
            "url": "https://www.frontiersin.org/articles/10.3389/fimmu.2020.01906/full",
            "content": "This review examines how immune dysregulation in space relates to immune disorders on Earth, with "
                       "particular focus on the role of cytokines in modulating inflammatory responses.",
        },
        {
            "title": "Cellular Stress Responses in Space and Their Implications for Human Health",
            "url": "https://www.nature.com/articles/s41526-020-0113-0",
            "content": "This paper discusses how stress response genes are activated in space and how understanding "
                       "these pathways could lead to new treatments for stress-related diseases on Earth.",
        },
    ],
}

_GENERIC = {
    "answer": (
        "Space biology research on gene expression changes has numerous Earth-based applications. The accelerated "
        "physiological changes observed in space serve as valuable models for studying similar processes on Earth "
        "that typically occur more slowly. For example, bone and muscle loss in microgravity mimics osteoporosis and "
        "sarcopenia but happens much faster, allowing researchers to test interventions more efficiently. The stress "
        "response pathways activated in space are similar to those involved in aging and various diseases, providing "
        "insights into fundamental cellular mechanisms. Radiation exposure in space also helps scientists understand "
        "DNA damage and repair processes relevant to cancer research."
    ),
    "sources": [
        {
            "title": "Space Biology Research and its Earth Applications",
            "url": "https://www.nature.com/articles/s41526-020-0108-y",
            "content": "This review summarizes how gene expression studies in space are contributing to medical and "
                       "biotechnological advances on Earth, with particular focus on accelerated aging models and "
                       "stress response pathways.",
        },
        {
            "title": "Translational Research from Space to Earth",
            "url": "https://www.sciencedirect.com/science/article/pii/S0094576520301764",
            "content": "This paper discusses how space biology findings are being applied to address health challenges on "
                       "Earth, including osteoporosis, muscle wasting disorders, and radiation-induced cellular damage.",
        },
    ],
}

_MEDICAL_GENERIC = {
    "answer": (
        "The medical relevance of these genes couldn't be retrieved at this time. However, these genes are known to "
        "be involved in important biological processes affected by spaceflight."
    ),
    "sources": [
        {
            "title": "NASA GeneLab",
            "url": "https://genelab.nasa.gov/",
            "content": "NASA's GeneLab provides open science data on space biology experiments.",
        },
    ],
}

# first match wins; matched against the query as sent upstream
_KEYWORD_INSIGHTS = [
    (("muscle", "MYH7", "ACTA1"), _MUSCLE),
    (("plant", "ATHB-7"), _PLANT),
    (("immune", "IL2RA"), _IMMUNE),
]


def _keyword_insight(query: str, default: Dict[str, Any]) -> ResearchResult:
    for keywords, body in _KEYWORD_INSIGHTS:
        if any(k in query for k in keywords):
            return ResearchResult.model_validate(body)
    return ResearchResult.model_validate(default)


def earth_applications(*, query: str, **_: Any) -> ResearchResult:
    return _keyword_insight(query, _GENERIC)


def medical_relevance(*, query: str, **_: Any) -> ResearchResult:
    return _keyword_insight(query, _MEDICAL_GENERIC)


def _planet_slug(text: str) -> str:
    q = (text or "").lower()
    return next((p.lower() for p in PLANETS if p.lower() in q), "planets")


def search(*, query: str, **_: Any) -> SearchResult:
    slug = _planet_slug(query)
    return SearchResult(
        answer=None,
        results=[{
            "title": "NASA Solar System Exploration",
            "url": "https://solarsystem.nasa.gov/",
            "image_url": f"https://science.nasa.gov/wp-content/uploads/2023/05/{slug}-800x600-1.jpg",
        }],
        images=[f"https://science.nasa.gov/wp-content/uploads/2023/05/{slug}-800x600-1.jpg"],
    )

# ==============================
# Chat (planet info by topic)
# ==============================

ATMOSPHERE = {
    "Mercury": "Mercury has a very thin atmosphere, almost a vacuum, consisting mainly of oxygen, sodium, hydrogen, helium, and potassium. The atmospheric pressure is less than one trillionth of Earth's atmospheric pressure.",
    "Venus": "Venus has a thick atmosphere composed mainly of carbon dioxide (96.5%) and nitrogen (3.5%), with traces of other gases. The atmospheric pressure is about 92 times that of Earth, making it the most dense atmosphere of any terrestrial planet.",
    "Earth": "Earth's atmosphere consists primarily of nitrogen (78%) and oxygen (21%), with trace amounts of argon, carbon dioxide, and other gases. It's divided into five main layers: troposphere, stratosphere, mesosphere, thermosphere, and exosphere.",
    "Mars": "Mars has a thin atmosphere composed mainly of carbon dioxide (95.3%), nitrogen (2.7%), and argon (1.6%). The atmospheric pressure is only about 0.6% of Earth's, making it much thinner but still capable of supporting weather patterns and dust storms.",
    "Jupiter": "Jupiter's atmosphere is the largest planetary atmosphere in the Solar System, composed mainly of hydrogen (89%) and helium (10%), with trace amounts of methane, ammonia, and water. It features the Great Red Spot, a giant storm that has existed for at least 400 years.",
    "Saturn": "Saturn's atmosphere is similar to Jupiter's, primarily composed of hydrogen (96.3%) and helium (3.25%), with traces of methane, ammonia, and water vapor. It has the strongest winds in the Solar System, reaching speeds of 1,800 km/h.",
    "Uranus": "Uranus has an atmosphere composed primarily of hydrogen (83%), helium (15%), and methane (2%). The methane absorbs red light and reflects blue light, giving Uranus its distinctive blue-green color.",
    "Neptune": "Neptune's atmosphere consists of hydrogen (80%), helium (19%), and methane (1.5%). Like Uranus, methane gives Neptune its blue color. It has the strongest winds in the Solar System, reaching speeds of 2,100 km/h.",
}

TEMPERATURE = {
    "Mercury": "Mercury experiences extreme temperature variations, ranging from about -173°C (-280°F) at night to 427°C (800°F) during the day. This extreme range is due to its thin atmosphere that cannot retain heat and its slow rotation.",
    "Venus": "Venus is the hottest planet in our solar system with an average surface temperature of about 462°C (864°F). This extreme heat is due to its thick atmosphere that traps heat in a runaway greenhouse effect.",
    "Earth": "Earth's average surface temperature is about 15°C (59°F), though it varies widely by location. The greenhouse effect keeps Earth warm enough to support liquid water and life.",
    "Mars": "Mars has an average temperature of about -63°C (-81°F), but it can range from -153°C (-243°F) at the poles in winter to 20°C (68°F) at the equator during summer days.",
    "Jupiter": "Jupiter's cloud-top temperature is about -145°C (-234°F). However, temperatures increase with depth due to the planet's internal heat, reaching thousands of degrees in its core.",
    "Saturn": "Saturn's average temperature is about -178°C (-288°F) at the cloud tops. Like Jupiter, its temperature increases with depth due to internal heat generation.",
    "Uranus": "Uranus is extremely cold with cloud-top temperatures around -224°C (-371°F). Interestingly, its upper atmosphere is colder than Neptune's, despite being closer to the Sun.",
    "Neptune": "Neptune has an average temperature of about -214°C (-353°F) at its cloud tops. Despite being the farthest planet from the Sun, it generates internal heat that makes it slightly warmer than Uranus.",
}

MISSIONS = {
    "Mercury": "Mercury has been visited by two spacecraft: NASA's Mariner 10 (1974-1975), which mapped about 45% of its surface, and NASA's MESSENGER (2011-2015), which orbited Mercury and mapped its entire surface. The BepiColombo mission, launched in 2018 by ESA and JAXA, is currently en route to Mercury.",
    "Venus": "Venus has been visited by numerous spacecraft, including NASA's Mariner 2 (first successful planetary flyby in 1962), Soviet Venera missions (first landing on another planet in 1970), NASA's Magellan (mapped 98% of the surface with radar in the 1990s), and ESA's Venus Express (2006-2014). NASA's Parker Solar Probe has made regular flybys of Venus.",
    "Earth": "Earth is continuously observed by hundreds of satellites for weather forecasting, navigation, communications, and scientific research. Notable Earth observation missions include NASA's Landsat program (since 1972), ESA's Copernicus program, and the International Space Station (since 1998).",
    "Mars": "Mars has been visited by numerous orbiters, landers, and rovers, including NASA's Mariner 4 (first successful flyby in 1965), Viking landers (1976), Pathfinder and Sojourner rover (1997), Spirit and Opportunity rovers (2004), Phoenix lander (2008), Curiosity rover (2012), MAVEN orbiter (2014), InSight lander (2018), and Perseverance rover with Ingenuity helicopter (2021). Other nations' missions include ESA's Mars Express, India's Mars Orbiter Mission, UAE's Hope, and China's Tianwen-1 with Zhurong rover.",
    "Jupiter": "Jupiter has been visited by several spacecraft, including NASA's Pioneer 10 and 11 (1973-1974), Voyager 1 and 2 (1979), Galileo (orbited from 1995-2003), New Horizons (flyby in 2007), and Juno (orbiting since 2016). ESA's JUICE mission and NASA's Europa Clipper are on their way to the Jovian system.",
    "Saturn": "Saturn has been visited by four spacecraft: NASA's Pioneer 11 (1979), Voyager 1 and 2 (1980-1981), and the NASA/ESA Cassini-Huygens mission (2004-2017), which orbited Saturn for 13 years and deployed the Huygens probe to Saturn's moon Titan, the first landing in the outer solar system.",
    "Uranus": "Uranus has only been visited once, by NASA's Voyager 2 spacecraft, which flew by in January 1986. This brief flyby provided most of what we know about Uranus and its moons and rings. No other missions have been sent, though several have been proposed for the future.",
    "Neptune": "Neptune has only been visited by one spacecraft, NASA's Voyager 2, which flew by in August 1989. This single flyby gave us most of our detailed knowledge of Neptune and its moons. No other spacecraft has visited Neptune, though several missions have been proposed.",
}

FUN_FACTS = {
    "Mercury": [
        "A day on Mercury (sunrise to sunrise) lasts 176 Earth days, while its year is only 88 Earth days, making a Mercury day longer than its year!",
        "Mercury's surface resembles our Moon with craters and ancient lava flows, but it also has unique 'wrinkle ridges' formed as the planet cooled and contracted.",
        "Despite being the closest planet to the Sun, Mercury is not the hottest planet. Venus is hotter due to its thick atmosphere.",
        "Mercury has a magnetic field that is only about 1% as strong as Earth's.",
    ],
    "Venus": [
        "Venus rotates backwards compared to other planets, so on Venus, the Sun rises in the west and sets in the east.",
        "A day on Venus is longer than its year. It takes 243 Earth days to rotate once but only 225 Earth days to orbit the Sun.",
        "The atmospheric pressure on Venus's surface is 92 times greater than Earth's, equivalent to the pressure at nearly 1 km deep in Earth's oceans.",
        "Venus has more volcanoes than any other planet in our solar system, with over 1,600 major volcanoes and many more smaller ones.",
    ],
    "Earth": [
        "Earth is the only planet not named after a god or goddess in Roman or Greek mythology.",
        "About 71% of Earth's surface is covered with water, making it appear blue from space and earning it the nickname 'the Blue Planet.'",
        "Earth's atmosphere extends about 10,000 km (6,200 miles) above the planet's surface, but most of it is within 16 km (10 miles) of the surface.",
        "Earth's magnetic field is generated by its liquid iron outer core and protects us from harmful solar radiation.",
    ],
    "Mars": [
        "Mars has the largest dust storms in the solar system, which can last for months and cover the entire planet.",
        "Mars has the tallest mountain in the solar system, Olympus Mons, which is about 22 km (13.6 miles) high and three times the height of Mount Everest.",
        "The red color of Mars comes from iron oxide (rust) on its surface.",
        "Mars has two small, irregularly shaped moons called Phobos and Deimos, which may be captured asteroids.",
    ],
    "Jupiter": [
        "Jupiter has the shortest day of all the planets, rotating once every 10 hours despite its enormous size.",
        "Jupiter's Great Red Spot is a storm that has been raging for at least 400 years and is large enough to fit three Earths inside it.",
        "Jupiter has at least 79 moons, including the four large Galilean moons: Io, Europa, Ganymede, and Callisto.",
        "Jupiter's moon Ganymede is the largest moon in our solar system and is even larger than the planet Mercury.",
    ],
    "Saturn": [
        "Saturn's rings are made up of billions of particles of ice and rock, ranging in size from tiny dust grains to house-sized boulders.",
        "Saturn has a density lower than water. It would float if placed in a giant bathtub!",
        "Saturn has the most extensive ring system of any planet, extending up to 282,000 km (175,000 miles) from the planet.",
        "Saturn's moon Titan is the only moon in our solar system with a substantial atmosphere and has lakes of liquid methane and ethane on its surface.",
    ],
    "Uranus": [
        "Uranus rotates on its side with an axial tilt of about 98 degrees, likely due to a massive collision in its past.",
        "Uranus was the first planet discovered using a telescope, by William Herschel in 1781.",
        "Uranus has 13 known rings, which are dark and narrow compared to Saturn's bright rings.",
        "Uranus is named after the Greek god of the sky, making it the only planet named after a Greek deity rather than a Roman one.",
    ],
    "Neptune": [
        "Neptune was mathematically predicted to exist before it was actually observed, based on irregularities in Uranus's orbit.",
        "Neptune has the strongest winds in the solar system, reaching speeds of up to 2,100 km/h (1,300 mph).",
        "Neptune's moon Triton orbits the planet backwards (retrograde) and is likely a captured dwarf planet from the Kuiper Belt.",
        "Neptune has only been visited by one spacecraft, Voyager 2, which flew by in 1989.",
    ],
}

GENERAL = {
    "Mercury": "Mercury is the smallest and innermost planet in the Solar System. It has a cratered surface similar to our Moon and virtually no atmosphere to retain heat, causing extreme temperature variations. Mercury orbits the Sun every 88 Earth days, making it the fastest planet in our solar system.",
    "Venus": "Venus is the second planet from the Sun and the hottest planet in our solar system due to its thick atmosphere that traps heat. Often called Earth's sister planet because of their similar size, Venus rotates backwards compared to other planets and has a day longer than its year.",
    "Earth": "Earth is the third planet from the Sun and the only astronomical object known to harbor life. About 71% of Earth's surface is covered with water, making it unique among planets in our solar system. Earth's atmosphere and magnetic field protect life from harmful solar radiation.",
    "Mars": "Mars is the fourth planet from the Sun and the second-smallest planet in the Solar System. Known as the 'Red Planet' due to iron oxide on its surface, Mars has polar ice caps, seasons similar to Earth, and evidence of ancient water flows. It's the most explored planet beyond Earth, with multiple rovers and orbiters studying it.",
    "Jupiter": "Jupiter is the fifth planet from the Sun and the largest in the Solar System. It's a gas giant primarily composed of hydrogen and helium, with no solid surface. Jupiter has a strong magnetic field, at least 79 moons, and its most famous feature is the Great Red Spot, a giant storm that has existed for hundreds of years.",
    "Saturn": "Saturn is the sixth planet from the Sun and is famous for its spectacular ring system. Like Jupiter, it's a gas giant composed mainly of hydrogen and helium. Saturn has at least 82 moons, including Titan, which has its own atmosphere and lakes of liquid methane.",
    "Uranus": "Uranus is the seventh planet from the Sun and the first to be discovered through a telescope. It's an ice giant with a blue-green color due to methane in its atmosphere. Uniquely, Uranus rotates on its side with an axial tilt of about 98 degrees, likely caused by a massive collision in its past.",
    "Neptune": "Neptune is the eighth and farthest known planet from the Sun. It's an ice giant similar to Uranus but with a more vivid blue color. Neptune has the strongest winds in the solar system and was predicted mathematically before it was observed. It has 14 known moons, including Triton, which orbits backwards and is likely a captured dwarf planet.",
}


def planet_info(planet: str, message: str) -> str:
    """Topic-matched planet blurb. The fun fact is picked by a checksum of the message."""
    name = _canonical_planet(planet)
    m = (message or "").lower()
    if "atmosphere" in m:
        return ATMOSPHERE.get(name, f"Information about {name}'s atmosphere is not available.")
    if "temperature" in m:
        return TEMPERATURE.get(name, f"Information about {name}'s temperature is not available.")
    if "mission" in m or "spacecraft" in m:
        return MISSIONS.get(name, f"Information about missions to {name} is not available.")
    if "fact" in m or "interesting" in m:
        facts = FUN_FACTS.get(name)
        if not facts:
            return f"Fun facts about {name} are not available."
        return facts[zlib.crc32(m.encode("utf-8")) % len(facts)]
    return GENERAL.get(name, f"General information about {name} is not available.")


def chat(*, planet: str, message: str, **_: Any) -> ChatReply:
    return ChatReply(response=planet_info(planet, message))

# ==============================
# NASA
# ==============================

def _image_set(query: str, created: str) -> List[NasaImage]:
    slug = ((query or "").split(" ")[0] or "planets").lower()
    title = slug[:1].upper() + slug[1:]
    return [
        NasaImage(
            title=f"{title} from NASA",
            description=f"Image of {slug}",
            date_created=created,
            href=f"https://science.nasa.gov/wp-content/uploads/2023/05/{slug}-800x600-1.jpg",
        ),
        NasaImage(
            title=f"{title} - NASA Solar System",
            description=f"Image of {slug}",
            date_created=created,
            href=f"https://solarsystem.nasa.gov/system/stellar_items/image_files/{slug}_480x320.jpg",
        ),
        NasaImage(
            title=f"{title} - NASA Image",
            description=f"Image of {slug}",
            date_created=created,
            href=f"https://www.nasa.gov/wp-content/uploads/2023/03/{slug}_1.jpg",
        ),
    ]


def nasa_images(*, query: str, now: Optional[float] = None, **_: Any) -> List[NasaImage]:
    ts = now if now is not None else time.time()
    created = datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return _image_set(query, created)


def pad_images(items: List[NasaImage], query: str, minimum: int = 3, now: Optional[float] = None) -> List[NasaImage]:
    out = list(items)
    for extra in nasa_images(query=query, now=now):
        if len(out) >= minimum:
            break
        out.append(extra)
    return out


APOD = {
    "title": "Our Solar System",
    "date": "2025-01-01",
    "explanation": (
        "The eight planets of our solar system, shown to scale by size. The Astronomy Picture of the Day could not be "
        "retrieved, so this overview image is shown instead."
    ),
    "url": "https://science.nasa.gov/wp-content/uploads/2023/05/planets-800x600-1.jpg",
    "media_type": "image",
}


def apod(**_: Any) -> Apod:
    return Apod.model_validate(APOD)
