from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = Field(default="sqlite:///./tickets.db")
    
    # Company branding (printed on every page header/footer)
    COMPANY_NAME: str = Field(default="FDG PRONTA RESPOSTA")
    COMPANY_CNPJ: str = Field(default="59.355.128/0001-10")
    COMPANY_ADDRESS: str = Field(
        default="R. Dona Francisca, 801 Sala 05 - Saguaçu, Joinville - SC, 89221-006"
    )
    COMPANY_PHONE_COMMERCIAL: str = Field(default="(47) 99135-6830")
    COMPANY_PHONE_MONITORING: str = Field(default="(47) 99160-7491")
    COMPANY_EMAIL: str = Field(default="contato@fdgprontaresposta.com.br")
    COMPANY_INSTAGRAM: str = Field(default="@fdgprontaresposta")
    COMPANY_WEBSITE: str = Field(default="www.fdgprontaresposta.com.br")
    COMPANY_LOGO_PATH: Optional[str] = Field(default=None)  # local path or URL
    
    # Rendering
    REPORT_THEME: str = Field(default="minimal")  # minimal | corporate
    REPORT_FONT_DIR: Optional[str] = Field(default=None)  # extra dir with DejaVuSans.ttf
    REPORT_TIMEZONE: str = Field(default="America/Sao_Paulo")
    REPORT_OUTPUT_DIR: str = Field(default="reports")
    
    # Photo loading
    IMAGE_FETCH_TIMEOUT: float = Field(default=30.0)
    IMAGE_FETCH_RETRIES: int = Field(default=3)
    IMAGE_JPEG_QUALITY: int = Field(default=85, ge=1, le=95)
    
    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_DIR: str = Field(default="logs")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
