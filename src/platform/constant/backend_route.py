# Remote ticketing API routes (relative to BACKEND_API_URL)

AUTH_ME = '/auth/me'

EVENT_GET = '/events/{event_id}'

TICKET_GET = '/tickets/{ticket_id}'
TICKET_MY_TICKETS = '/tickets/my-tickets'
TICKET_BUY = '/tickets/buy'
TICKET_VERIFY = '/tickets/verify'

RESALE_LIST = '/tickets/resale'
RESALE_LISTINGS_BY_EVENT = '/tickets/resale/{event_id}'
