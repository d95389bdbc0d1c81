"""
Shared JSON output contract for the resume extractor and editor prompts.
"""

RESUME_JSON_SCHEMA = """\
{
  "name": "string or null",
  "email": "string or null",
  "phone": "string or null",
  "website": "string or null",
  "location": "string or null",
  "summary": "string or null",
  "experience": [
    {
      "title": "string",
      "company": "string",
      "location": "string or null",
      "startDate": "string or null",
      "endDate": "string or null",
      "description": "string or null",
      "responsibilities": ["string"]
    }
  ],
  "education": [
    {
      "degree": "string",
      "institution": "string",
      "location": "string or null",
      "year": "string or null",
      "description": "string or null"
    }
  ],
  "skills": ["string"],
  "projects": [
    {
      "name": "string",
      "description": "string or null",
      "technologies": ["string"],
      "url": "string or null"
    }
  ]
}"""
