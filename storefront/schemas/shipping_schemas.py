from pydantic import BaseModel


class ShippingInfo(BaseModel):
    charges: int
    description: str
    region: str


class PincodeValidation(BaseModel):
    is_valid: bool
    message: str
