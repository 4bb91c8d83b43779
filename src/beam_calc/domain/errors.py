from __future__ import annotations


class BeamCalcError(ValueError):
    """
    Error base del motor. `code` es estable (se expone en la API);
    el mensaje es legible y se muestra tal cual al usuario.
    """
    code: str = "beam_calc_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidGeometry(BeamCalcError):
    code = "invalid_geometry"


class InvalidLoad(BeamCalcError):
    code = "invalid_load"


class UnknownSupportType(BeamCalcError):
    code = "unknown_support_type"


class InvalidSectionModel(BeamCalcError):
    """Configuración de sección rota: fatal al arrancar, nunca error de cliente."""
    code = "invalid_section_model"
