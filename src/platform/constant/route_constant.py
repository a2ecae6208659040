# API Route Constants

# Base API
API_BASE = '/api'

# Ticket routes
TICKET_BASE = f'{API_BASE}/ticket'
TICKET_MY_TICKETS = f'{TICKET_BASE}/my'
TICKET_RESALE_QUOTE = f'{TICKET_BASE}/resale-quote'
TICKET_LIST_FOR_RESALE = f'{TICKET_BASE}/{{ticket_id}}/resale'
TICKET_RESALE_LISTINGS = f'{TICKET_BASE}/event/{{event_id}}/resale'
TICKET_PURCHASE = f'{TICKET_BASE}/purchase'
TICKET_VERIFICATION = f'{TICKET_BASE}/{{ticket_id}}/verification'

# Verification page (the path QR codes point to)
VERIFY_TICKET = '/verify-ticket'
