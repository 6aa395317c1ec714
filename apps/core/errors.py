class ServiceError(Exception):
    """Base error carried back to the API caller as ``{code, message}``."""
    status = 500
    code = "INTERNAL_ERROR"
    default_message = "Terjadi kesalahan pada server."

    def __init__(self, message=None, **extra):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)


class NotFound(ServiceError):
    status = 404
    code = "NOT_FOUND"
    default_message = "Data tidak ditemukan."


class Unauthorized(ServiceError):
    status = 401
    code = "UNAUTHORIZED"
    default_message = "Silakan login terlebih dahulu."


class Forbidden(ServiceError):
    status = 403
    code = "FORBIDDEN"
    default_message = "Anda tidak memiliki izin untuk melakukan tindakan ini."


class ValidationFailed(ServiceError):
    status = 400
    code = "VALIDATION_ERROR"
    default_message = "Data yang dikirim tidak valid."


class Conflict(ServiceError):
    status = 409
    code = "CONFLICT"
    default_message = "Data sudah diproses sebelumnya."


class AggregationFailed(ServiceError):
    status = 500
    code = "AGGREGATION_FAILED"
    default_message = "Gagal menghitung ulang progres hafalan."
