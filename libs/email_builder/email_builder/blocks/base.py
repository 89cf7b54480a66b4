"""
Blocs de base pour email_builder.
Un bloc = une unité visuelle de l'email, discriminée par `type`.

Clés JSON en camelCase (format blocksJson), attributs Python en snake_case.
Les champs inconnus sont ignorés et les entiers legacy ("16px") tolérés :
un document écrit sous un ancien schéma doit toujours se charger.
Une valeur de champ invalide (null, mauvais type) retombe sur le défaut du champ
au lieu d'invalider tout le bloc.
"""
import logging
import re
import uuid
from typing import Annotated, Any, List, Optional, TypeVar

from pydantic import (
    BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, ValidationInfo,
    ValidatorFunctionWrapHandler, field_validator,
)
from pydantic.alias_generators import to_camel

log = logging.getLogger(__name__)


def new_block_id() -> str:
    """Identifiant opaque, jamais réutilisé."""
    return uuid.uuid4().hex


def _lenient_int(value: Any) -> Optional[int]:
    """24 / 24.0 / "24" / "24px" → 24 ; tout le reste → None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(round(value))
    if isinstance(value, str):
        m = re.fullmatch(r"\s*(-?\d+(?:\.\d+)?)\s*(?:px)?\s*", value)
        if m:
            return int(round(float(m.group(1))))
    return None


def _lenient_items(value: Any) -> List[Any]:
    """null / non-liste → [] ; les éléments qui ne sont pas des objets sont écartés."""
    if not isinstance(value, (list, tuple)):
        return []
    return [v for v in value if isinstance(v, (dict, BaseModel))]


T = TypeVar("T")

LenientInt = Annotated[Optional[int], BeforeValidator(_lenient_int)]
LenientItems = Annotated[List[T], BeforeValidator(_lenient_items)]


class EmailModel(BaseModel):
    """Base commune : camelCase en JSON, extra ignoré, instances immuables."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class BlockData(EmailModel):
    """Données d'un bloc : un champ invalide prend sa valeur par défaut."""

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> Any:
        try:
            return handler(value)
        except ValidationError:
            field = cls.model_fields[info.field_name]
            if field.is_required():
                raise
            log.debug("%s.%s : valeur invalide %r remplacée par le défaut", cls.__name__, info.field_name, value)
            return field.get_default(call_default_factory=True)


class BlockStyles(BlockData):
    """Propriétés visuelles optionnelles ; le compilateur fournit les défauts."""
    background_color: Optional[str] = None
    background_opacity: LenientInt = None     # 0-100, défaut 100
    text_color: Optional[str] = None
    font_size: Optional[str] = None
    font_weight: Optional[str] = None
    text_align: Optional[str] = None          # left | center | right

    # Padding : représentation legacy (chaîne CSS) + champs discrets
    padding: Optional[str] = None
    padding_top: LenientInt = None
    padding_bottom: LenientInt = None
    padding_horizontal: LenientInt = None

    border_radius: Optional[str] = None
    border_width: LenientInt = None
    border_color: Optional[str] = None
    border_style: Optional[str] = None        # solid | dashed | dotted

    width: Optional[str] = None
    height: Optional[str] = None

    # Bouton / lien / icônes
    button_color: Optional[str] = None
    button_text_color: Optional[str] = None
    button_variant: Optional[str] = None      # primary | secondary
    button_size: LenientInt = None            # 80-140, défaut 100
    button_shape: Optional[str] = None        # pill | rectangle | rounded
    show_arrow: Optional[bool] = None

    divider_thickness: LenientInt = None
    divider_style: Optional[str] = None
    icon_size: LenientInt = None


class BaseBlock(BlockData):
    """Bloc de base (classe parente de tous les blocs)."""
    id: str = Field(default_factory=new_block_id)
    type: str
    content: str = ""
    styles: BlockStyles = Field(default_factory=BlockStyles)
