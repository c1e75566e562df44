from datetime import datetime
from typing import Annotated
from pydantic import AfterValidator
import uuid

from cmv_app.utils.timezone import to_local_tz


def new_id() -> str:
    return str(uuid.uuid4())


# Naive datetimes are read as local time; everything is stored timezone-aware
LocalDatetime = Annotated[datetime, AfterValidator(to_local_tz)]
