'''
Salary Tracker backend: students, conducted classes and monthly payment cycles.
'''
