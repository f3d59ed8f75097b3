"""Dublin neighbourhoods whose site slugs carry a "-dublin" suffix.

Entries are slugs, e.g. "sandymount" -> /property-for-rent/sandymount-dublin.
"""

DUBLIN_AREAS = frozenset([
    "adamstown",
    "artane",
    "ashtown",
    "balbriggan",
    "baldoyle",
    "balgriffin",
    "ballinteer",
    "ballsbridge",
    "ballyboden",
    "ballybrack",
    "ballycullen",
    "ballyfermot",
    "ballymun",
    "beaumont",
    "blackrock",
    "blanchardstown",
    "booterstown",
    "cabinteely",
    "cabra",
    "castleknock",
    "chapelizod",
    "cherrywood",
    "churchtown",
    "clondalkin",
    "clonee",
    "clongriffin",
    "clonsilla",
    "clonskeagh",
    "clontarf",
    "coolock",
    "crumlin",
    "dalkey",
    "dartry",
    "donabate",
    "donnybrook",
    "donaghmede",
    "drimnagh",
    "drumcondra",
    "dun-laoghaire",
    "dundrum",
    "east-wall",
    "finglas",
    "firhouse",
    "foxrock",
    "glasnevin",
    "glenageary",
    "goatstown",
    "grand-canal-dock",
    "harolds-cross",
    "howth",
    "inchicore",
    "irishtown",
    "islandbridge",
    "kilbarrack",
    "killiney",
    "kilmainham",
    "kimmage",
    "knocklyon",
    "leopardstown",
    "lucan",
    "malahide",
    "marino",
    "milltown",
    "monkstown",
    "mount-merrion",
    "northwood",
    "ongar",
    "palmerstown",
    "phibsborough",
    "portmarnock",
    "portobello",
    "raheny",
    "ranelagh",
    "rathfarnham",
    "rathgar",
    "rathmines",
    "ringsend",
    "rush",
    "saggart",
    "sandycove",
    "sandyford",
    "sandymount",
    "santry",
    "shankill",
    "skerries",
    "smithfield",
    "stepaside",
    "stillorgan",
    "stoneybatter",
    "sutton",
    "swords",
    "tallaght",
    "templeogue",
    "terenure",
    "the-liberties",
    "walkinstown",
    "whitehall",
])
