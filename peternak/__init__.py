"""
Peternak (Participant) App

Registration and maintenance of program participants who receive
loaned livestock:
- Participant CRUD with unique NIK
- Narrow performance status (status kinerja) update
"""
