from itertools import groupby


def print_header(title):
    print("=" * 60)
    print(title)
    print("=" * 60)


def print_schedule_terminal(sessions):
    """Display sessions grouped by date."""
    print_header("COURSE SCHEDULE")

    for day, day_sessions in groupby(sessions, key=lambda s: s.date):
        print(f"\n--- {day.strftime('%A %Y-%m-%d')} ---")
        for session in day_sessions:
            print(f"{session.start_time}-{session.end_time}: "
                  f"{session.course_title} (session {session.session_number})")


def print_statistics(statistics):
    print_header("STATISTICS")
    print(f"Available time slots:      {statistics.total_available_slots}")
    print(f"Sessions scheduled:        {statistics.total_scheduled_sessions}")
    print(f"Slots left after schedule: {statistics.slots_after_scheduling}")
    print(f"Utilization:               {statistics.utilization_percentage:.2f}%")
    if statistics.fully_booked_dates:
        booked = ", ".join(d.isoformat() for d in statistics.fully_booked_dates)
        print(f"Fully booked dates:        {booked}")


def view_schedule(result, show_sessions=True):
    """Main function to view a schedule result in the terminal."""
    if show_sessions:
        if not result.sessions:
            print("No sessions scheduled!")
        else:
            print_schedule_terminal(result.sessions)
    print()
    print_statistics(result.statistics)
