from pydantic import BaseModel, ConfigDict, Field, model_validator


class CodeRequest(BaseModel):
    # both are optional here so that a missing field is reported as a client
    # error by the route rather than as a schema error
    code: str | None = None
    language: str | None = None


class ExecutionResult(BaseModel):
    success: bool
    output: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "ExecutionResult":
        if self.success and (self.error is not None or self.output is None):
            raise ValueError("a successful result carries output and no error")
        if not self.success and (self.output is not None or not self.error):
            raise ValueError("a failed result carries an error and no output")
        return self


class LanguageInfo(BaseModel):
    name: str
    display_name: str = Field(alias="displayName")
    extension: str
    template: str

    model_config = ConfigDict(populate_by_name=True)


class HealthStatus(BaseModel):
    status: str
    message: str
