import re
from pydantic import BaseModel, model_validator

# bidi marks and BOMs pasted in from phone keyboards / barcode apps
_INVISIBLE = re.compile(r'[\u200b-\u200f\u202a-\u202e\u2066-\u2069\ufeff]')
_SPACES = re.compile(r'[ \t]+')


def clean_text(text: str):
    text = _SPACES.sub(" ", _INVISIBLE.sub("", text)).strip()
    return text or None


class EmptyStringModel(BaseModel):
    """Request model base: blank strings from the mobile client are treated as missing.

    Only the model's own string fields are cleaned. Nested models clean
    themselves; dicts and lists are passed through untouched.
    """

    model_config = {"populate_by_name": True, "from_attributes": True}

    @model_validator(mode="before")
    @classmethod
    def _clean_payload(cls, data):
        if not isinstance(data, dict):
            return data
        return {key: clean_text(value) if isinstance(value, str) else value
                for key, value in data.items()}
