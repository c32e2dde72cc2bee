from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# DB의 INTEGER 컬럼이 담을 수 있는 최대값
MAX_ID = 2_147_483_647


class CamelModel(BaseModel):
    """
    JSON에서는 camelCase 키를 사용하고, 파이썬 코드와 ORM 객체에서는 snake_case 속성을 사용합니다.
    """
    model_config = ConfigDict(extra='ignore', alias_generator=to_camel, populate_by_name=True, from_attributes=True,
                              str_strip_whitespace=True)


class OkOutput(BaseModel):
    model_config = ConfigDict(extra='ignore')

    ok: bool = True
