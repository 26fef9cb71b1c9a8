from datetime import datetime

import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from smartattend.constants import (
    APP_NAME,
    CLOCK_FONT,
    RECORDS_FOLDER,
    TITLE_FONT,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from smartattend.errors import AttendanceError
from smartattend.export import export_attendance_report, export_students_csv
from smartattend.stats import student_summaries


class AttendanceApp:
    def __init__(self, master, system):
        self.master = master
        self.system = system
        master.title(f"{APP_NAME} - {system.settings.school_name}")
        master.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        master.configure(bg="white")
        master.option_add('*Font', 'Arial 10')

        title_label = tk.Label(
            master,
            text=system.settings.school_name,
            font=TITLE_FONT,
            fg="#2c3e50",
            bg="white",
            pady=10
        )
        title_label.pack()

        self.clock_label = tk.Label(master, font=CLOCK_FONT, fg="black", bg="white")
        self.clock_label.pack()
        self.update_clock()

        stats_frame = tk.Frame(master, bg="white")
        stats_frame.pack(pady=10)

        self.stat_labels = {}
        for col, (key, caption) in enumerate([
            ("total_students", "Total Students"),
            ("present_today", "Present Today"),
            ("absent_today", "Absent Today"),
            ("attendance_rate", "Attendance Rate"),
            ("total_days", "Days Recorded"),
        ]):
            tk.Label(stats_frame, text=caption, font=("Arial", 11),
                     fg="#7f8c8d", bg="white").grid(row=0, column=col, padx=12)
            label = tk.Label(stats_frame, font=("Arial", 16, "bold"), fg="#2c3e50", bg="white")
            label.grid(row=1, column=col, padx=12)
            self.stat_labels[key] = label

        button_style = {"font": ("Arial", 11), "relief": "raised", "bd": 1, "padx": 8, "pady": 3}
        buttons_frame = tk.Frame(master, bg="white")
        buttons_frame.pack(pady=8)

        for col, (text, command, color) in enumerate([
            ("Take Attendance", self.take_attendance, "#27ae60"),
            ("Add Student", self.add_student, "#3498db"),
            ("Import CSV", self.import_students, "#9b59b6"),
            ("Export Students", self.export_students, "#d35400"),
            ("Export Report", self.export_report, "#16a085"),
        ]):
            tk.Button(buttons_frame, text=text, command=command, bg=color,
                      fg="white", **button_style).grid(row=0, column=col, padx=3, pady=3)

        tables_frame = tk.Frame(master, bg="white")
        tables_frame.pack(fill="both", expand=True, padx=15, pady=10)

        self.trend_tree = ttk.Treeview(tables_frame, columns=("date", "present", "absent"),
                                       show="headings", height=7)
        for column, text in [("date", "Date"), ("present", "Present"), ("absent", "Absent")]:
            self.trend_tree.heading(column, text=text, anchor="center")
            self.trend_tree.column(column, width=90, anchor="center")
        self.trend_tree.pack(side="left", fill="y", padx=5)

        self.students_tree = ttk.Treeview(
            tables_frame,
            columns=("roll_no", "name", "class", "rate"),
            show="headings",
            height=10
        )
        for column, text, width in [("roll_no", "Roll No", 80), ("name", "Name", 180),
                                    ("class", "Class", 80), ("rate", "Attendance", 90)]:
            self.students_tree.heading(column, text=text, anchor="center")
            self.students_tree.column(column, width=width, anchor="center")
        self.students_tree.pack(side="left", fill="both", expand=True, padx=5)

        self.refresh()

    def update_clock(self):
        self.clock_label.config(text=datetime.now().strftime("%I:%M:%S %p"))
        self.master.after(1000, self.update_clock)

    def refresh(self):
        stats = self.system.refresh_statistics()
        for key, label in self.stat_labels.items():
            value = getattr(stats, key)
            label.config(text=f"{value}%" if key == "attendance_rate" else str(value))

        for item in self.trend_tree.get_children():
            self.trend_tree.delete(item)
        for point in stats.trend:
            self.trend_tree.insert("", "end", values=(point.date, point.present, point.absent))

        for item in self.students_tree.get_children():
            self.students_tree.delete(item)
        for row in student_summaries(self.system.roster, self.system.ledger):
            self.students_tree.insert("", "end", values=(row["roll_no"], row["name"], row["class"], f"{row['rate']}%"))

        self.show_warnings()

    def show_warnings(self):
        if self.system.warnings:
            messagebox.showwarning("Warning", "\n".join(self.system.warnings))
            self.system.warnings.clear()

    def take_attendance(self):
        try:
            session, sent = self.system.take_attendance()
        except AttendanceError as e:
            messagebox.showerror("Error", str(e))
            return

        message = f"Attendance saved: {len(session.present_records)} present, {len(session.absent_records)} absent."
        if self.system.settings.sms_enabled:
            message += f"\nSMS notifications sent to {sent} parents."
        messagebox.showinfo("Success", message)
        self.refresh()

    def add_student(self):
        add_window = tk.Toplevel(self.master)
        add_window.title("Add Student")
        add_window.configure(bg="white")

        entries = {}
        for row, (key, caption) in enumerate([
            ("name", "Name:"),
            ("roll_no", "Roll No:"),
            ("student_class", "Class:"),
            ("parent_phone", "Parent Phone:"),
        ]):
            tk.Label(add_window, text=caption, font=("Arial", 12),
                     fg="#2c3e50", bg="white").grid(row=row, column=0, padx=3, pady=3, sticky="e")
            entry = tk.Entry(add_window, font=("Arial", 11), bg="#ecf0f1")
            entry.grid(row=row, column=1, padx=3, pady=3)
            entries[key] = entry

        def save_student():
            try:
                student = self.system.add_student(**{k: e.get() for k, e in entries.items()})
            except AttendanceError as e:
                messagebox.showwarning("Warning", str(e), parent=add_window)
                return
            messagebox.showinfo("Success", f"Student {student.name} added successfully!")
            add_window.destroy()
            self.refresh()

        btn_frame = tk.Frame(add_window, bg="white")
        btn_frame.grid(row=4, column=0, columnspan=2, pady=15)
        tk.Button(btn_frame, text="Save", font=("Arial", 11), command=save_student,
                  bg="#27ae60", fg="white").pack(side="left", padx=8)
        tk.Button(btn_frame, text="Cancel", font=("Arial", 11), command=add_window.destroy,
                  bg="#e74c3c", fg="white").pack(side="left", padx=8)

        entries["name"].focus_set()

    def import_students(self):
        filepath = filedialog.askopenfilename(filetypes=[("CSV files", "*.csv")])
        if not filepath:
            return
        try:
            result = self.system.import_students_file(filepath)
        except AttendanceError as e:
            messagebox.showerror("Error", str(e))
            return

        message = f"Successfully imported {result.success_count} students"
        if result.errors:
            message += f"\n\n{len(result.errors)} errors:\n" + "\n".join(result.errors)
        messagebox.showinfo("Import", message)
        self.refresh()

    def export_students(self):
        try:
            path = export_students_csv(self.system.roster, RECORDS_FOLDER, self.system.today())
        except AttendanceError as e:
            messagebox.showwarning("Warning", str(e))
            return
        messagebox.showinfo("Success", f"Student data exported to {path}")

    def export_report(self):
        try:
            path = export_attendance_report(self.system.roster, self.system.ledger, self.system.today())
        except AttendanceError as e:
            messagebox.showwarning("Warning", str(e))
            return
        messagebox.showinfo("Success", f"Report exported to {path}")
