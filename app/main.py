import logging
import tkinter as tk
from tkinter import ttk

from core.quiz_loader import QuizFetchError, fetch_quiz
from core.quiz_session import QuizSession
from core.report_sink import ReportSink
from core.watcher import InterruptionWatcher
from models import OPTION_LETTERS, Quiz

log = logging.getLogger(__name__)

REFRESH_MS = 200
CLOSE_WAIT_SECONDS = 5.0


class TakeQuizApp(tk.Tk):
    def __init__(
        self,
        quiz_id: str,
        base_url: str,
        username: str | None,
        sink: ReportSink,
        fullscreen: bool = True,
    ):
        super().__init__()
        self.title("Quiz")
        self.geometry("1024x720")
        self.minsize(800, 560)
        self._apply_style()

        self.quiz_id = quiz_id
        self.base_url = base_url
        self.username = username
        self.sink = sink
        self.start_fullscreen = fullscreen

        self.session: QuizSession | None = None
        self.watcher: InterruptionWatcher | None = None
        self.selected_option = tk.IntVar(value=-1)
        self.showing_result = False

        self._build_ui()
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self.after(0, self._load_quiz)

    def _apply_style(self) -> None:
        style = ttk.Style(self)
        style.theme_use("clam")
        style.configure("TFrame", background="#f5f5f5")
        style.configure("TLabel", background="#f5f5f5", font=("Segoe UI", 11))
        style.configure("TButton", padding=6, font=("Segoe UI", 10))
        style.configure("TRadiobutton", background="#f5f5f5", font=("Segoe UI", 11))
        style.configure("Timer.TLabel", font=("Segoe UI", 14, "bold"))
        style.configure("Paused.TLabel", font=("Segoe UI", 14, "bold"), foreground="#ff9800")
        style.configure("Error.TLabel", foreground="#f44336")

    def _build_ui(self) -> None:
        self.container = ttk.Frame(self)
        self.container.pack(fill=tk.BOTH, expand=True)

        self.message_frame = ttk.Frame(self.container, padding=20)
        self.quiz_frame = ttk.Frame(self.container, padding=20)
        self.result_frame = ttk.Frame(self.container, padding=20)
        for frame in (self.message_frame, self.quiz_frame, self.result_frame):
            frame.grid(row=0, column=0, sticky="nsew")
        self.container.rowconfigure(0, weight=1)
        self.container.columnconfigure(0, weight=1)

        self.message_label = ttk.Label(self.message_frame, text="Loading quiz...")
        self.message_label.pack(anchor=tk.W, pady=5)
        self.retry_button = ttk.Button(
            self.message_frame, text="Retry", command=self._load_quiz
        )

        header = ttk.Frame(self.quiz_frame)
        header.pack(fill=tk.X)
        self.title_label = ttk.Label(header, text="", font=("Segoe UI", 16, "bold"))
        self.title_label.pack(side=tk.LEFT)
        self.pause_button = ttk.Button(header, text="Pause", command=self._toggle_timer)
        self.pause_button.pack(side=tk.RIGHT, padx=5)
        self.timer_label = ttk.Label(header, text="", style="Timer.TLabel")
        self.timer_label.pack(side=tk.RIGHT, padx=10)

        self.progress_label = ttk.Label(self.quiz_frame, text="")
        self.progress_label.pack(anchor=tk.W, pady=(15, 5))
        self.question_label = ttk.Label(self.quiz_frame, text="", wraplength=900)
        self.question_label.pack(anchor=tk.W, pady=5)
        self.options_frame = ttk.Frame(self.quiz_frame)
        self.options_frame.pack(fill=tk.X, pady=10)

        nav_buttons = ttk.Frame(self.quiz_frame)
        nav_buttons.pack(fill=tk.X, pady=10)
        ttk.Button(nav_buttons, text="Previous", command=self._prev_question).pack(
            side=tk.LEFT, padx=5
        )
        ttk.Button(nav_buttons, text="Next", command=self._next_question).pack(
            side=tk.LEFT, padx=5
        )
        ttk.Button(nav_buttons, text="Clear answer", command=self._clear_answer).pack(
            side=tk.LEFT, padx=5
        )
        ttk.Button(nav_buttons, text="Submit", command=self._on_submit).pack(
            side=tk.LEFT, padx=5
        )
        ttk.Button(nav_buttons, text="Back to quizzes", command=self._on_back).pack(
            side=tk.RIGHT, padx=5
        )

        self.result_label = ttk.Label(
            self.result_frame, text="", font=("Segoe UI", 16, "bold")
        )
        self.result_label.pack(anchor=tk.W, pady=5)
        self.result_detail_label = ttk.Label(self.result_frame, text="")
        self.result_detail_label.pack(anchor=tk.W, pady=5)
        ttk.Button(self.result_frame, text="Close", command=self._on_close).pack(
            anchor=tk.W, pady=10
        )

        self.message_frame.tkraise()

    # -- loading -------------------------------------------------------------

    def _load_quiz(self) -> None:
        self.retry_button.pack_forget()
        self.message_label.config(text="Loading quiz...", style="TLabel")
        self.update_idletasks()
        try:
            quiz = fetch_quiz(self.quiz_id, base_url=self.base_url)
        except QuizFetchError as exc:
            self.message_label.config(text=exc.message, style="Error.TLabel")
            if exc.retryable:
                self.retry_button.pack(anchor=tk.W, pady=5)
            return
        self._start_attempt(quiz)

    def _start_attempt(self, quiz: Quiz) -> None:
        self.session = QuizSession(quiz, self.quiz_id, self.username, sink=self.sink)
        self.watcher = InterruptionWatcher(self.session, self.sink)
        self.watcher.start()

        for sequence, handler in (
            ("<Escape>", self._on_escape),
            ("<F11>", self._on_toggle_fullscreen),
            ("<Left>", lambda _event: self._prev_question()),
            ("<Right>", lambda _event: self._next_question()),
            ("<space>", lambda _event: self._toggle_timer()),
        ):
            funcid = self.bind(sequence, handler)
            self.watcher.subscribe(
                sequence, lambda seq=sequence, fid=funcid: self.unbind(seq, fid)
            )

        self.title_label.config(text=quiz.title)
        self._show_question()
        self.quiz_frame.tkraise()
        if self.start_fullscreen:
            self._apply_fullscreen(True)
        self.after(REFRESH_MS, self._refresh)

    # -- fullscreen ----------------------------------------------------------

    def _is_fullscreen(self) -> bool:
        return bool(self.attributes("-fullscreen"))

    def _apply_fullscreen(self, value: bool) -> None:
        self.attributes("-fullscreen", value)
        if self.watcher:
            self.watcher.on_fullscreen_change(value, cleanup=self.update_idletasks)

    def _on_escape(self, _event: tk.Event) -> None:
        if self._is_fullscreen():
            if self.watcher:
                self.watcher.on_escape_key(True)
            self._apply_fullscreen(False)

    def _on_toggle_fullscreen(self, _event: tk.Event) -> None:
        self._apply_fullscreen(not self._is_fullscreen())

    def _exit_fullscreen_quietly(self) -> None:
        if self.watcher and self._is_fullscreen():
            self.watcher.exit_fullscreen(lambda: self._apply_fullscreen(False))

    # -- question view -------------------------------------------------------

    def _show_question(self) -> None:
        if not self.session:
            return
        for widget in self.options_frame.winfo_children():
            widget.destroy()
        index = self.session.current_question_index
        question = self.session.quiz.questions[index]
        self.progress_label.config(
            text=f"Question {index + 1} of {self.session.question_count}"
        )
        self.question_label.config(text=question.question)
        self.selected_option.set(self.session.answers.get(index, -1))
        for option_idx, option in enumerate(question.options):
            letter = OPTION_LETTERS[option_idx] if option_idx < len(OPTION_LETTERS) else "?"
            ttk.Radiobutton(
                self.options_frame,
                text=f"{letter}. {option}",
                value=option_idx,
                variable=self.selected_option,
                command=lambda idx=option_idx: self._save_answer(idx),
            ).pack(anchor=tk.W, pady=3)

    def _save_answer(self, option_idx: int) -> None:
        if not self.session:
            return
        self.session.select_answer(self.session.current_question_index, option_idx)

    def _clear_answer(self) -> None:
        if not self.session:
            return
        self.session.clear_answer(self.session.current_question_index)
        self.selected_option.set(-1)

    def _next_question(self) -> None:
        if self.session and not self.session.submission_started:
            self.session.go_to_next()
            self._show_question()

    def _prev_question(self) -> None:
        if self.session and not self.session.submission_started:
            self.session.go_to_previous()
            self._show_question()

    def _toggle_timer(self) -> None:
        if self.session and not self.session.submission_started:
            self.session.timer.toggle()

    # -- submission ----------------------------------------------------------

    def _on_submit(self) -> None:
        if self.watcher:
            self.watcher.on_user_submit()

    def _refresh(self) -> None:
        if not self.session:
            return
        timer = self.session.timer
        if timer.paused:
            self.timer_label.config(
                text=f"PAUSED  {timer.format_time_left()}", style="Paused.TLabel"
            )
            self.pause_button.config(text="Resume")
        else:
            self.timer_label.config(
                text=f"Time Left: {timer.format_time_left()}", style="Timer.TLabel"
            )
            self.pause_button.config(text="Pause")

        if self.session.result is not None and not self.showing_result:
            self._show_result()
            return
        self.after(REFRESH_MS, self._refresh)

    def _show_result(self) -> None:
        result = self.session.result
        self.showing_result = True
        self._exit_fullscreen_quietly()
        self.result_label.config(text=f"Score: {result.score} / {result.total}")
        detail = (
            f"Correct answers: {result.correct_count} of {len(result.questions)}. "
            f"Performance: {result.performance_level}."
        )
        if self.session.auto_submit_reason:
            detail += f"\nSubmitted automatically: {self.session.auto_submit_reason}."
        self.result_detail_label.config(text=detail)
        self.result_frame.tkraise()

    def _teardown(self) -> None:
        if self.watcher:
            self.watcher.close()
            self.watcher.wait(CLOSE_WAIT_SECONDS)

    def _on_back(self) -> None:
        if self.watcher:
            self.watcher.on_route_change()
        self._teardown()
        self.destroy()

    def _on_close(self) -> None:
        if self.watcher:
            self.watcher.on_page_unload()
        self._teardown()
        self.destroy()


def run_quiz_window(
    quiz_id: str,
    base_url: str,
    username: str | None,
    sink: ReportSink,
    fullscreen: bool = True,
) -> None:
    app = TakeQuizApp(quiz_id, base_url, username, sink, fullscreen=fullscreen)
    app.mainloop()
