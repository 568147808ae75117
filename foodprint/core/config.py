from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Foodprint API"
    log_level: str = "INFO"
    spoonacular_api_key: str = ""
    spoonacular_api_url: str = "https://api.spoonacular.com"
    geoapify_api_key: str = ""
    geoapify_api_url: str = "https://api.geoapify.com/v1"
    geocode_country_code: str = "in"
    openrouteservice_api_key: str = ""
    openrouteservice_api_url: str = "https://api.openrouteservice.org"
    external_timeout_seconds: float = 10.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
