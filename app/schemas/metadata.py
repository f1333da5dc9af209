from pydantic import BaseModel, Field


class ManifestVersion(BaseModel):
    name: str


class MiniAppManifest(BaseModel):
    appId: str
    developer: str
    name: str
    platforms: list[str]
    shortName: str
    version: ManifestVersion
    website: str
    description: str


class InteractionPattern(BaseModel):
    type: int
    names: list[str] | None = None
    ids: list[str] | None = None


class CommandOptionSpec(BaseModel):
    name: str
    description: str
    type: int
    required: bool = False
    autocomplete: bool = False


class CommandMetadata(BaseModel):
    name: str
    shortName: str
    supportedEnvs: list[str] = Field(default_factory=list)


class ApplicationCommandSpec(BaseModel):
    metadata: CommandMetadata
    name: str
    type: int
    description: str
    options: list[CommandOptionSpec] = Field(default_factory=list)


class ActionMetadata(BaseModel):
    manifest: MiniAppManifest
    supportedInteractions: list[InteractionPattern]
    applicationCommands: list[ApplicationCommandSpec]
