from pydantic import BaseModel, Field
from typing import List, Optional

class VerseDocument(BaseModel):
    verse: int = Field(..., ge=1)
    text: str

class ChapterDocument(BaseModel):
    chapter: int = Field(..., ge=1)
    verses: List[VerseDocument]

class BookDocument(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    chapters: List[ChapterDocument]

class TranslationDocument(BaseModel):
    translation: str = Field(..., min_length=1)
    name: Optional[str] = None
    books: List[BookDocument]
