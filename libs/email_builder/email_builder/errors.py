"""
Taxonomie des erreurs email_builder.

- ConstraintViolation : rejet synchrone avant mutation (header/footer en double,
  aucune sélection, champ immuable…). Jamais d'entrée d'historique.
- AssetUploadError    : échec du stockage d'un asset, message distinct par cause.
- InvalidImage        : octets illisibles lors du recadrage.

Les données legacy malformées ne lèvent jamais d'erreur (cf. core/styles.py).
"""


class EmailBuilderError(Exception):
    """Erreur de base du module : `message` est destiné à l'utilisateur."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConstraintViolation(EmailBuilderError, ValueError):
    pass


class AssetUploadError(EmailBuilderError):
    """Échec d'upload sans cause identifiée."""

    def __init__(self, message: str = "Échec de l'upload de l'image"):
        super().__init__(message)


class BucketMissing(AssetUploadError):
    def __init__(self, bucket: str = ""):
        super().__init__(
            f"Espace de stockage '{bucket}' non configuré — contactez un administrateur"
            if bucket else "Espace de stockage non configuré — contactez un administrateur"
        )
        self.bucket = bucket


class SizeExceeded(AssetUploadError):
    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Fichier trop volumineux ({size / 1_048_576:.1f} Mo) — limite {limit / 1_048_576:.0f} Mo"
        )
        self.size = size
        self.limit = limit


class InvalidImage(EmailBuilderError, ValueError):
    pass
