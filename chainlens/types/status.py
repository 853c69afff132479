from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ConnectionStatus(BaseModel):
    """Snapshot of the language-model connection owned by the supervisor."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    state: str = Field(default="uninitialized", description="Supervisor lifecycle state")
    connected: bool = Field(default=False, description="Model passed its last start probe and is in use")
    fallback_active: bool = Field(default=False, description="Chat is served from canned responses")
    last_error: Optional[str] = Field(default=None, description="Most recent failure reason")
    retry_count: int = Field(default=0, description="Model failures since the last successful start")
    max_retries: int = Field(default=3, description="Failures tolerated before fallback")
    connection_attempts: int = Field(default=0, description="Start attempts since the last successful connection")
    max_connection_attempts: int = Field(default=20, description="Start attempts allowed")
    has_model: bool = Field(default=False, description="A model client has been constructed")
    health_check_active: bool = Field(default=False, description="Periodic probe is scheduled")
