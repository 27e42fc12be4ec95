from pydantic import BaseModel, Field, StrictStr

class UserSignin(BaseModel):
    """Signin request"""
    username: StrictStr = Field(..., min_length=1)
    password: StrictStr = Field(..., min_length=1)

class Token(BaseModel):
    """Signin response"""
    token: str

class SignupResponse(BaseModel):
    message: str
    token: str
