from config.dashboard_config import DashboardConfig

# OpenF1 - https://openf1.org
SESSIONS_API_URL = f"{DashboardConfig.OPENF1_API_URL}/sessions"
SESSION_RESULTS_API_URL = f"{DashboardConfig.OPENF1_API_URL}/session_result"
DRIVERS_API_URL = f"{DashboardConfig.OPENF1_API_URL}/drivers"
LAPS_API_URL = f"{DashboardConfig.OPENF1_API_URL}/laps"
POSITION_API_URL = f"{DashboardConfig.OPENF1_API_URL}/position"

# Jolpica (Ergast compatible)
JOLPICA_API_URL = DashboardConfig.JOLPICA_API_URL
NEXT_RACE_API_URL = f"{JOLPICA_API_URL}/current/next.json"

# Open-Meteo
WEATHER_FORECAST_API_URL = f"{DashboardConfig.OPEN_METEO_API_URL}/forecast"


def driver_standings_url(year: int) -> str:
    return f"{JOLPICA_API_URL}/{year}/driverStandings.json"


def constructor_standings_url(year: int) -> str:
    return f"{JOLPICA_API_URL}/{year}/constructorStandings.json"
