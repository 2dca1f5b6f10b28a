"""Sample tender notice preloaded by the CLI (--sample) and the API."""

SAMPLE_FILENAME = "sample_tender_notice.txt"

SAMPLE_TENDER_TEXT = """GOVERNMENT OF INDIA
MINISTRY OF DEFENCE
TENDER NOTICE

Tender No: MOD/2024/001
Date: 15/01/2024
Last Date of Submission: 28/02/2024

Procurement of Computer Equipment
Estimated Value: ₹50,00,000 (Fifty Lakh Rupees)

Eligibility Criteria:
- Minimum 3 years experience in IT equipment supply
- Annual turnover of at least ₹1 crore
- Valid GST registration

Contact Details:
Email: procurement@mod.gov.in
Phone: +91-11-23011234

Penalties:
- Late submission: ₹10,000 per day
- Non-compliance: 5% of contract value

Required Documents:
1. Company registration certificate
2. GST certificate
3. Financial statements
4. Technical specifications"""
