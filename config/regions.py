"""
Static geographic reference data: region membership, state names and the
city coordinate table used to place map markers.

Every valid state code belongs to exactly one region.
"""

REGIONS: dict[str, tuple[str, ...]] = {
    "Norte": ("AC", "AP", "AM", "PA", "RO", "RR", "TO"),
    "Nordeste": ("AL", "BA", "CE", "MA", "PB", "PE", "PI", "RN", "SE"),
    "Centro-Oeste": ("DF", "GO", "MT", "MS"),
    "Sudeste": ("ES", "MG", "RJ", "SP"),
    "Sul": ("PR", "RS", "SC"),
}

STATE_NAMES: dict[str, str] = {
    "AC": "Acre",
    "AL": "Alagoas",
    "AP": "Amapá",
    "AM": "Amazonas",
    "BA": "Bahia",
    "CE": "Ceará",
    "DF": "Distrito Federal",
    "ES": "Espírito Santo",
    "GO": "Goiás",
    "MA": "Maranhão",
    "MT": "Mato Grosso",
    "MS": "Mato Grosso do Sul",
    "MG": "Minas Gerais",
    "PA": "Pará",
    "PB": "Paraíba",
    "PR": "Paraná",
    "PE": "Pernambuco",
    "PI": "Piauí",
    "RJ": "Rio de Janeiro",
    "RN": "Rio Grande do Norte",
    "RS": "Rio Grande do Sul",
    "RO": "Rondônia",
    "RR": "Roraima",
    "SC": "Santa Catarina",
    "SP": "São Paulo",
    "SE": "Sergipe",
    "TO": "Tocantins",
}

# Capital / major city per state: (city, state, latitude, longitude)
CITY_COORDINATES: list[tuple[str, str, float, float]] = [
    ("São Paulo", "SP", -23.5505, -46.6333),
    ("Rio de Janeiro", "RJ", -22.9068, -43.1729),
    ("Salvador", "BA", -12.9714, -38.5014),
    ("Fortaleza", "CE", -3.7319, -38.5267),
    ("Belo Horizonte", "MG", -19.9167, -43.9345),
    ("Brasília", "DF", -15.8267, -47.9218),
    ("Manaus", "AM", -3.1190, -60.0217),
    ("Curitiba", "PR", -25.4244, -49.2654),
    ("Recife", "PE", -8.0476, -34.8770),
    ("Porto Alegre", "RS", -30.0346, -51.2177),
    ("Belém", "PA", -1.4558, -48.5044),
    ("Goiânia", "GO", -16.6869, -49.2648),
    ("João Pessoa", "PB", -7.1195, -34.8450),
    ("Natal", "RN", -5.7945, -35.2110),
    ("Campo Grande", "MS", -20.4697, -54.6201),
    ("Florianópolis", "SC", -27.5954, -48.5480),
    ("Aracaju", "SE", -10.9472, -37.0731),
    ("Teresina", "PI", -5.0892, -42.8019),
    ("Maceió", "AL", -9.6658, -35.7353),
    ("São Luís", "MA", -2.5387, -44.2825),
]

# Initial zoom for the national map view.
MAP_ZOOM: int = 4

# Reverse lookup: state code → region name.
STATE_REGION: dict[str, str] = {
    state: region for region, states in REGIONS.items() for state in states
}
