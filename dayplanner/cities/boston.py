from ..schema import Location
from . import CityConfig, area

AREAS = [
    area("Downtown", "area", "Downtown",
         ["urban", "historic", "commercial", "cultural"],
         ["Back Bay", "North End", "Beacon Hill", "Chinatown"],
         ["government buildings", "historic sites", "shopping", "finance"],
         (4, 5, 3, 4)),
    area("Back Bay", "neighborhood", "Downtown",
         ["upscale", "historic", "shopping", "dining"],
         ["Fenway", "South End", "Beacon Hill", "Cambridge"],
         ["Newbury Street", "Copley Square", "Boston Public Library", "brownstones"],
         (3, 4, 4, 5)),
    area("Beacon Hill", "neighborhood", "Downtown",
         ["historic", "picturesque", "charming", "upscale"],
         ["Back Bay", "West End", "Downtown", "Cambridge"],
         ["Acorn Street", "State House", "historic architecture", "gas lamps"],
         (2, 4, 3, 4)),
    area("North End", "neighborhood", "Downtown",
         ["italian", "historic", "food", "cultural"],
         ["Downtown", "West End", "Waterfront", "Beacon Hill"],
         ["Italian restaurants", "Paul Revere House", "Old North Church", "pastry shops"],
         (2, 4, 5, 5)),
    area("Fenway", "neighborhood", "West",
         ["sports", "youthful", "university", "cultural"],
         ["Back Bay", "Longwood", "Kenmore", "Mission Hill"],
         ["Fenway Park", "Red Sox", "universities", "museums"],
         (2, 4, 5, 5)),
    area("Seaport", "neighborhood", "East",
         ["modern", "waterfront", "innovation", "dining"],
         ["South Boston", "Downtown", "Fort Point"],
         ["restaurants", "harbor views", "museums", "convention center"],
         (3, 4, 5, 5)),
    area("South End", "neighborhood", "Central",
         ["trendy", "diverse", "foodie", "historic"],
         ["Back Bay", "Roxbury", "Bay Village", "South Boston"],
         ["restaurants", "Victorian rowhouses", "arts", "boutiques"],
         (2, 3, 4, 5)),
    area("Cambridge", "area", "North",
         ["academic", "intellectual", "diverse", "cultural"],
         ["Somerville", "Allston/Brighton", "Charlestown"],
         ["Harvard University", "MIT", "Harvard Square", "innovation"],
         (3, 4, 4, 4)),
    area("Somerville", "area", "North",
         ["eclectic", "youthful", "diverse", "artsy"],
         ["Cambridge", "Medford", "Charlestown"],
         ["Davis Square", "Union Square", "restaurants", "breweries"],
         (2, 3, 4, 5)),
    area("Charlestown", "neighborhood", "North",
         ["historic", "waterfront", "residential", "scenic"],
         ["North End", "Cambridge", "East Boston"],
         ["Bunker Hill Monument", "USS Constitution", "Navy Yard", "Freedom Trail"],
         (2, 3, 2, 4)),
    area("Jamaica Plain", "neighborhood", "Southwest",
         ["diverse", "green", "lively", "community-oriented"],
         ["Roxbury", "Mission Hill", "Roslindale", "Brookline"],
         ["Jamaica Pond", "Arnold Arboretum", "restaurants", "local shops"],
         (2, 3, 3, 4)),
    area("Allston/Brighton", "neighborhood", "West",
         ["student", "diverse", "casual", "affordable"],
         ["Fenway", "Brookline", "Cambridge"],
         ["universities", "music venues", "ethnic restaurants", "student housing"],
         (2, 3, 4, 4)),
    area("Chinatown", "neighborhood", "Downtown",
         ["cultural", "vibrant", "food", "busy"],
         ["Downtown", "Theater District", "South End", "Financial District"],
         ["Chinese restaurants", "markets", "cultural events", "bakeries"],
         (3, 5, 4, 5)),
    area("Dorchester", "neighborhood", "South",
         ["diverse", "residential", "community-oriented", "evolving"],
         ["South Boston", "Roxbury", "Mattapan"],
         ["beaches", "parks", "diverse dining", "JFK Library"],
         (2, 3, 2, 3)),
    area("Financial District", "area", "Downtown",
         ["business", "commercial", "historic", "bustling"],
         ["Downtown", "Waterfront", "Chinatown", "North End"],
         ["skyscrapers", "historic sites", "business centers", "restaurants"],
         (5, 5, 2, 1)),
]

# "Harvard Square" and "Kendall Square" are landmarks here, not Cambridge aliases,
# so a search for them stays that specific.
BOSTON = CityConfig(
    key="boston",
    name="Boston",
    timezone="America/New_York",
    region="us",
    center=Location(lat=42.3601, lng=-71.0589),
    areas=AREAS,
    stations=[
        "Park Street", "Downtown Crossing", "Government Center", "Harvard Square",
        "Kendall/MIT", "Copley", "Back Bay", "JFK/UMass", "Hynes Convention Center",
        "Forest Hills", "Maverick", "Alewife", "Porter", "Quincy Center",
    ],
    colloquial_names={
        "Back Bay": ["back bay", "backbay", "newbury street area", "copley square area"],
        "Beacon Hill": ["beacon hill", "beaconhill", "the hill", "state house area"],
        "North End": ["north end", "little italy", "italian district", "boston's little italy"],
        "Fenway": ["fenway", "fenway park area", "kenmore", "kenmore square"],
        "Seaport": ["seaport district", "seaport", "innovation district", "south boston waterfront"],
        "Downtown": ["downtown", "downtown crossing", "government center"],
        "South End": ["south end", "southend", "tremont street area"],
        "Cambridge": ["cambridge", "central square", "harvard", "mit area"],
        "Somerville": ["somerville", "davis square", "union square", "assembly row"],
        "Charlestown": ["charlestown", "navy yard", "bunker hill area"],
        "Jamaica Plain": ["jamaica plain", "jp", "jamaica pond area"],
        "Allston/Brighton": ["allston", "brighton", "allston-brighton", "allston brighton", "student area"],
        "Chinatown": ["chinatown", "chinese district", "theater district", "leather district"],
        "Dorchester": ["dorchester", "dot", "uphams corner", "fields corner"],
        "Financial District": ["financial district", "fidi", "fin district", "post office square",
                               "downtown financial"],
    },
    spelling_corrections={
        "northend": "North End",
        "harvard sq": "Harvard Square",
        "kendall": "Kendall Square",
        "kendall sq": "Kendall Square",
        "govt center": "Downtown",
        "faneuil": "Faneuil Hall",
        "quincy mkt": "Quincy Market",
        "newbury st": "Newbury Street",
        "boylston st": "Boylston Street",
        "tremont st": "Tremont Street",
        "charlestwon": "Charlestown",
        "dorchestor": "Dorchester",
        "sommerville": "Somerville",
    },
    landmarks=[
        "Harvard Square", "Kendall Square", "Faneuil Hall", "Quincy Market",
        "Newbury Street", "Boylston Street", "Tremont Street", "Boston Common",
        "Public Garden", "Freedom Trail", "South Station", "North Station",
        "Fenway Park", "Copley Square", "Boston Public Library", "Museum of Fine Arts",
        "Isabella Stewart Gardner Museum", "New England Aquarium", "Acorn Street",
    ],
    popular_defaults=["Back Bay", "North End", "Downtown"],
    default_start={"morning": "Back Bay", "midday": "Downtown", "afternoon": "Back Bay", "evening": "North End"},
    vague_locations=["somewhere", "anywhere", "nearby", "around here", "boston", "the city", "town", "beantown"],
)
