from pydantic_settings import BaseSettings, SettingsConfigDict

from aml_search.models import SearchOptions


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AML_SEARCH_", env_file=".env", extra="ignore")

    # Default search modes, overridable per request
    match_case: bool = False
    match_whole_word: bool = False

    # Root log level for the server entry points
    log_level: str = "INFO"

    # Name announced by the MCP server
    server_name: str = "aml-search"

    def base_options(self) -> SearchOptions:
        """Return the SearchOptions every operator starts from."""
        return SearchOptions(match_case=self.match_case, match_whole_word=self.match_whole_word)

    def options_for(self, match_case: bool | None = None, match_whole_word: bool | None = None) -> SearchOptions:
        """Return base options with any explicitly given modes applied on top."""
        base = self.base_options()
        update = {}
        if match_case is not None:
            update["match_case"] = match_case
        if match_whole_word is not None:
            update["match_whole_word"] = match_whole_word
        return base.model_copy(update=update)
